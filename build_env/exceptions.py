"""Holds exceptions raised while provisioning an environment"""

from typing import Optional


class ProvisioningFailure(Exception):
    """Raised when the build orchestrator could not provide the environment.

    The orchestrator's exit status and output are kept as-is so callers can
    surface them without reinterpretation.
    """
    def __init__(self, message: str,
                 returncode: Optional[int] = None,
                 stdout: str = "",
                 stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
