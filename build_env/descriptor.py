"""Contains the build environment descriptor and its resolution against a host"""

from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlatformCondition(BaseModel):
    """Predicate over the host operating system.

    Holds for a host when its platform identifier is one of ``platforms``.
    Identifiers compare case-insensitively; anything unrecognized simply
    does not satisfy the predicate.
    """
    model_config = ConfigDict(frozen=True)

    platforms: Tuple[str, ...] = ()
    """Platform identifiers the predicate holds for, e.g. ``("darwin",)``"""

    def holds(self, host_platform: Optional[str]) -> bool:
        """Evaluate the predicate for a host platform identifier"""
        if not host_platform:
            return False
        host = host_platform.strip().lower()
        return any(host == p.lower() for p in self.platforms)

    def __str__(self) -> str:
        if not self.platforms:
            return "never"
        return "host is " + " or ".join(self.platforms)


class BuildEnvironmentSpec(BaseModel):
    """Declarative description of a project's native build dependencies"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    """Name of the project the environment is for"""
    base_dependencies: Tuple[str, ...] = ()
    """Dependencies required on every host, in order"""
    platform_condition: PlatformCondition = PlatformCondition()
    """Predicate selecting the conditional dependencies"""
    conditional_dependencies: Tuple[str, ...] = ()
    """Dependencies appended when the platform condition holds"""
    conditional_namespace: Optional[str] = None
    """Attribute path the conditional dependencies live under in the package set"""

    @model_validator(mode="after")
    def check_dependency_sets(self) -> "BuildEnvironmentSpec":
        """Rejects duplicated identifiers and dependencies on the project itself"""
        for field_name in ("base_dependencies", "conditional_dependencies"):
            seen = set()
            for identifier in getattr(self, field_name):
                if identifier in seen:
                    raise ValueError(f"Duplicate dependency '{identifier}' in {field_name}")
                seen.add(identifier)
                if identifier == self.name:
                    raise ValueError(f"{self.name} cannot depend on itself")
        return self


class Dependency(BaseModel):
    """A single resolved dependency identifier"""
    model_config = ConfigDict(frozen=True)

    identifier: str
    namespace: Optional[str] = None

    @property
    def attribute_path(self) -> str:
        """Fully qualified attribute path within the package set"""
        if self.namespace:
            return f"{self.namespace}.{self.identifier}"
        return self.identifier

    def __str__(self) -> str:
        return self.identifier


class EffectiveDependencySet(BaseModel):
    """Host-specific, ordered and de-duplicated dependencies of a project"""
    model_config = ConfigDict(frozen=True)

    name: str
    host_platform: Optional[str] = None
    dependencies: Tuple[Dependency, ...] = ()

    @property
    def identifiers(self) -> Tuple[str, ...]:
        """The dependency identifiers, in order"""
        return tuple(dep.identifier for dep in self.dependencies)

    def __iter__(self) -> Iterator[Dependency]:  # type: ignore[override]
        return iter(self.dependencies)

    def __len__(self) -> int:
        return len(self.dependencies)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.identifiers


def resolve_environment(spec: BuildEnvironmentSpec,
                        host_platform: Optional[str]) -> EffectiveDependencySet:
    """
    Resolve the dependencies a host needs to build the project

    Args:
        spec: Environment descriptor
        host_platform: Platform identifier of the host, e.g. ``linux`` or ``darwin``

    Returns:
        The base dependencies, followed by the conditional dependencies when
        the platform condition holds. Identifiers appear only once.
    """
    base = [Dependency(identifier=i) for i in spec.base_dependencies]
    conditional: List[Dependency] = []
    if spec.platform_condition.holds(host_platform):
        conditional = [Dependency(identifier=i, namespace=spec.conditional_namespace)
                       for i in spec.conditional_dependencies]

    dependencies: List[Dependency] = []
    seen = set()
    for dep in base + conditional:
        if dep.identifier in seen:
            continue
        seen.add(dep.identifier)
        dependencies.append(dep)

    return EffectiveDependencySet(name=spec.name,
                                  host_platform=host_platform,
                                  dependencies=tuple(dependencies))


__all__ = [
    "BuildEnvironmentSpec",
    "Dependency",
    "EffectiveDependencySet",
    "PlatformCondition",
    "resolve_environment",
]
