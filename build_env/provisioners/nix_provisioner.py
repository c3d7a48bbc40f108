"""
Nix shell provisioner implementation
"""

from typing import Optional

from .base_provisioner import BaseProvisioner, EnvironmentHandle
from ..descriptor import EffectiveDependencySet


def _nix_string(value: str) -> str:
    """Quote a value as a Nix string literal"""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("${", "\\${")
    return f'"{escaped}"'


class NixShellProvisioner(BaseProvisioner):
    """Provisions environments through nix-shell"""

    name = "nix"

    def render(self, dependency_set: EffectiveDependencySet) -> str:
        """
        Render the dependency set as a nix-shell expression

        Args:
            dependency_set: Resolved dependencies

        Returns:
            Nix expression text
        """
        package_set = self.config.get("package_set", "<nixpkgs>")

        lines = [
            f"with import {package_set} {{}};",
            "",
            "stdenv.mkDerivation {",
            f"  name = {_nix_string(dependency_set.name)};",
        ]
        if len(dependency_set):
            lines.append("  buildInputs = with pkgs; [")
            for dep in dependency_set:
                lines.append(f"    {dep.attribute_path}")
            lines.append("  ];")
        else:
            lines.append("  buildInputs = [ ];")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def provision(self,
                  dependency_set: EffectiveDependencySet,
                  command: Optional[str] = None,
                  capture_output: bool = False) -> EnvironmentHandle:
        """Write the expression and enter it with nix-shell"""
        expression_path = self.work_dir / "shell.nix"
        self.write_file(expression_path, self.render(dependency_set))

        cmd = [self.config.get("executable", "nix-shell")]
        if self.config.get("pure", False):
            cmd.append("--pure")
        cmd.append(str(expression_path.resolve()))
        if command:
            cmd.extend(["--run", command])

        self.logger.info(f"Provisioning {dependency_set.name} with {len(dependency_set)} "
                         f"dependencies via {cmd[0]}")
        result = self.run_command(cmd, capture_output=capture_output)

        return EnvironmentHandle(
            provisioner=self.name,
            name=dependency_set.name,
            dependency_set=dependency_set,
            returncode=result.returncode,
            expression_path=expression_path
        )
