"""
Base provisioner class that all provisioners inherit from
"""

import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..descriptor import EffectiveDependencySet
from ..exceptions import ProvisioningFailure


class EnvironmentHandle(BaseModel):
    """Result of a successful provisioning request"""
    model_config = ConfigDict(frozen=True)

    provisioner: str
    name: str
    dependency_set: EffectiveDependencySet
    returncode: int = 0
    expression_path: Optional[Path] = None
    manifest_path: Optional[Path] = None


class BaseProvisioner(ABC):
    """Abstract base class for all provisioners"""

    name = "base"

    def __init__(self,
                 config: Dict[str, Any],
                 work_dir: Path,
                 logger: Any,
                 dry_run: bool = False):
        """
        Initialize base provisioner

        Args:
            config: Provisioner configuration
            work_dir: Directory generated files are written to
            logger: Logger instance
            dry_run: If True, don't actually run commands
        """
        self.config = config or {}
        self.work_dir = Path(work_dir)
        self.logger = logger
        self.dry_run = dry_run
        self.env = os.environ.copy()

    def run_command(self,
                    cmd: List[str],
                    cwd: Optional[Path] = None,
                    capture_output: bool = False) -> subprocess.CompletedProcess:
        """
        Run an orchestrator command with logging

        Args:
            cmd: Command and arguments
            cwd: Working directory
            capture_output: Capture stdout/stderr

        Returns:
            CompletedProcess instance

        Raises:
            ProvisioningFailure: The command exited non-zero or could not be started
        """
        if cwd is None:
            cwd = self.work_dir

        cmd_str = " ".join(str(c) for c in cmd)
        self.logger.debug(f"Running: {cmd_str}")
        self.logger.debug(f"  in: {cwd}")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would run: {cmd_str}")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=self.env,
                check=False,
                capture_output=capture_output,
                text=True
            )
        except FileNotFoundError as e:
            raise ProvisioningFailure(f"{cmd[0]} not found: {e}") from e

        if result.returncode != 0:
            self.logger.error(f"Command failed: {cmd_str}")
            raise ProvisioningFailure(
                f"{cmd[0]} exited with status {result.returncode}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr
            )

        if capture_output and result.stdout:
            self.logger.debug(f"Output: {result.stdout}")

        return result

    def write_file(self, path: Path, content: str) -> None:
        """Write a generated file into the work directory"""
        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would write {path}")
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.logger.debug(f"Wrote {path}")

    @abstractmethod
    def provision(self,
                  dependency_set: EffectiveDependencySet,
                  command: Optional[str] = None,
                  capture_output: bool = False) -> EnvironmentHandle:
        """Provide an environment with the given dependencies"""
        pass
