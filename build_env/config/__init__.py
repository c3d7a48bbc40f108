"""
Configuration management for the development environment
"""

import yaml
from pathlib import Path
from typing import Dict, List, Any, Optional

from ..descriptor import BuildEnvironmentSpec

DEFAULT_CONFIG_DIR = Path(__file__).parent


class ConfigLoader:
    """Loads the environment descriptor and platform configuration"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration loader

        Args:
            config_dir: Directory containing configuration files
        """
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR

        env_file = self.config_dir / "environment.yaml"
        if not env_file.exists():
            raise FileNotFoundError(f"Environment config not found: {env_file}")

        with open(env_file, 'r') as f:
            self.env_config = yaml.safe_load(f) or {}

        platforms_file = self.config_dir / "platforms.yaml"
        if not platforms_file.exists():
            raise FileNotFoundError(f"Platforms config not found: {platforms_file}")

        with open(platforms_file, 'r') as f:
            self.platforms_config = yaml.safe_load(f) or {}

        if "environment" not in self.env_config:
            raise ValueError(f"No environment section in {env_file}")

        # Validated once; the descriptor is frozen afterwards
        self.spec = BuildEnvironmentSpec.model_validate(self.env_config["environment"])

    def get_environment_spec(self) -> BuildEnvironmentSpec:
        """Get the environment descriptor"""
        return self.spec

    def get_platforms(self) -> List[str]:
        """Get list of recognized platform identifiers"""
        return list(self.platforms_config.get("platforms", {}).keys())

    def is_known_platform(self, name: str) -> bool:
        """Check if a platform identifier or alias is recognized"""
        return self.normalize_platform(name) in self.get_platforms()

    def normalize_platform(self, name: str) -> str:
        """
        Map a platform name or alias to its canonical identifier

        Args:
            name: Platform name, e.g. ``macos``

        Returns:
            Canonical identifier, or the lowercased name if unrecognized
        """
        lowered = name.strip().lower()
        platforms = self.platforms_config.get("platforms", {})

        if lowered in platforms:
            return lowered

        for platform_name, platform_config in platforms.items():
            aliases = (platform_config or {}).get("aliases", [])
            if lowered in (a.lower() for a in aliases):
                return platform_name

        return lowered

    def get_provisioners(self) -> List[str]:
        """Get list of configured provisioners"""
        return list(self.env_config.get("provisioners", {}).keys())

    def get_provisioner_config(self, name: str) -> Dict[str, Any]:
        """
        Get configuration for a specific provisioner

        Args:
            name: Provisioner name (nix, manifest)

        Returns:
            Provisioner configuration dictionary, empty if not configured
        """
        return self.env_config.get("provisioners", {}).get(name) or {}

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get an option

        Args:
            key: Option key
            default: Default value if not found

        Returns:
            Option value
        """
        options = self.env_config.get("options", {})
        return options.get(key, default)

    def get_all_configs(self) -> Dict[str, Any]:
        """Get all configuration data"""
        return {
            "environment": self.env_config,
            "platforms": self.platforms_config
        }


__all__ = ["ConfigLoader", "DEFAULT_CONFIG_DIR"]
