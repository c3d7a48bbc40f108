"""
Pijul development environment
Resolves the native build dependencies of Pijul for the current host
and hands them to an external build orchestrator (Nix)
"""

__version__ = "1.0.0"

from .descriptor import (
    BuildEnvironmentSpec,
    Dependency,
    EffectiveDependencySet,
    PlatformCondition,
    resolve_environment,
)
from .main import BuildEnvironment

__all__ = [
    "BuildEnvironment",
    "BuildEnvironmentSpec",
    "Dependency",
    "EffectiveDependencySet",
    "PlatformCondition",
    "resolve_environment",
    "__version__",
]
