"""
Provisioners that hand a dependency set to an external build orchestrator
"""

from .base_provisioner import BaseProvisioner, EnvironmentHandle
from .nix_provisioner import NixShellProvisioner
from .manifest_provisioner import ManifestProvisioner
from .orchestrator import ProvisioningOrchestrator

__all__ = [
    "BaseProvisioner",
    "EnvironmentHandle",
    "NixShellProvisioner",
    "ManifestProvisioner",
    "ProvisioningOrchestrator"
]
