"""
Manifest provisioner implementation
"""

from typing import Optional

import yaml

from .base_provisioner import BaseProvisioner, EnvironmentHandle
from ..descriptor import EffectiveDependencySet


class ManifestProvisioner(BaseProvisioner):
    """Writes the dependency set to a manifest for file-driven orchestrators"""

    name = "manifest"

    def render(self, dependency_set: EffectiveDependencySet) -> str:
        """Render the manifest as YAML"""
        manifest = {
            "name": dependency_set.name,
            "platform": dependency_set.host_platform,
            "dependencies": [dep.attribute_path for dep in dependency_set],
        }
        return yaml.safe_dump(manifest, sort_keys=False)

    def provision(self,
                  dependency_set: EffectiveDependencySet,
                  command: Optional[str] = None,
                  capture_output: bool = False) -> EnvironmentHandle:
        """Write the manifest; ``command`` is not supported"""
        if command:
            self.logger.warning("The manifest provisioner does not run commands, ignoring")

        manifest_path = self.work_dir / self.config.get("filename", "environment-manifest.yaml")
        self.write_file(manifest_path, self.render(dependency_set))
        self.logger.success(f"Manifest for {dependency_set.name} written to {manifest_path}")

        return EnvironmentHandle(
            provisioner=self.name,
            name=dependency_set.name,
            dependency_set=dependency_set,
            manifest_path=manifest_path
        )
