"""
Provisioning orchestrator that drives resolution and provisioning
"""

from pathlib import Path
from typing import Any, Dict, Optional

from .base_provisioner import BaseProvisioner, EnvironmentHandle
from .manifest_provisioner import ManifestProvisioner
from .nix_provisioner import NixShellProvisioner
from ..descriptor import EffectiveDependencySet, resolve_environment


class ProvisioningOrchestrator:
    """Resolves the environment for a host and hands it to a provisioner"""

    PROVISIONER_MAP = {
        "nix": NixShellProvisioner,
        "manifest": ManifestProvisioner,
    }

    def __init__(self,
                 config: Any,
                 host_platform: Optional[str],
                 work_dir: Path,
                 logger: Any,
                 dry_run: bool = False):
        """
        Initialize provisioning orchestrator

        Args:
            config: Configuration loader
            host_platform: Normalized platform identifier of the host
            work_dir: Directory generated files are written to
            logger: Logger instance
            dry_run: If True, don't actually provision
        """
        self.config = config
        self.host_platform = host_platform
        self.work_dir = Path(work_dir)
        self.logger = logger
        self.dry_run = dry_run

    def resolve(self) -> EffectiveDependencySet:
        """Resolve the effective dependency set for the host"""
        spec = self.config.get_environment_spec()
        dependency_set = resolve_environment(spec, self.host_platform)
        self.logger.debug(f"Condition '{spec.platform_condition}' on {self.host_platform}: "
                          f"{spec.platform_condition.holds(self.host_platform)}")
        self.logger.debug(f"Resolved {len(dependency_set)} dependencies: "
                          f"{', '.join(dependency_set.identifiers)}")
        return dependency_set

    def get_provisioner(self, name: Optional[str] = None) -> BaseProvisioner:
        """
        Get provisioner instance by name

        Args:
            name: Provisioner name, defaults to the configured default

        Returns:
            Provisioner instance
        """
        name = name or self.config.get_option("default_provisioner", "nix")

        provisioner_class = self.PROVISIONER_MAP.get(name)
        if not provisioner_class:
            raise ValueError(f"Unknown provisioner: {name}. "
                             f"Available: {', '.join(self.PROVISIONER_MAP)}")

        return provisioner_class(
            config=self.config.get_provisioner_config(name),
            work_dir=self.work_dir,
            logger=self.logger,
            dry_run=self.dry_run
        )

    def provision(self,
                  name: Optional[str] = None,
                  command: Optional[str] = None,
                  capture_output: bool = False) -> EnvironmentHandle:
        """
        Resolve and provision the environment

        Raises:
            ProvisioningFailure: Passed through unchanged from the provisioner
        """
        provisioner = self.get_provisioner(name)
        return provisioner.provision(self.resolve(), command=command,
                                     capture_output=capture_output)

    def get_provision_info(self) -> Dict[str, Any]:
        """Get a summary of what would be provisioned for the host"""
        spec = self.config.get_environment_spec()
        dependency_set = self.resolve()
        return {
            "name": spec.name,
            "platform": self.host_platform,
            "condition": str(spec.platform_condition),
            "condition_holds": spec.platform_condition.holds(self.host_platform),
            "dependencies": list(dependency_set.identifiers),
            "work_dir": str(self.work_dir),
        }
