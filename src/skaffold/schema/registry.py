"""Registry of configuration versions and their lineages."""

import functools
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType, ModuleType

from skaffold.schema.errors import UnknownVersionError
from skaffold.schema.util import VersionedModel
from skaffold.schema.versions import (
    v1,
    v1alpha1,
    v1alpha2,
    v1alpha3,
    v1alpha4,
    v1alpha5,
    v1beta1,
    v1beta2,
    v1beta3,
    v1beta4,
    v1beta5,
    v1beta6,
    v2alpha1,
    v2beta1,
    v3,
    v3alpha1,
    v3beta1,
    v4beta1,
)

LATEST_V1_VERSION = v2beta1.VERSION
LATEST_VERSION = v4beta1.VERSION


class Lineage(StrEnum):
    """Independently evolved generations of the configuration schema."""

    V1 = "v1"
    V2 = "v2"


@dataclass(frozen=True)
class Version:
    """A registered version: its apiVersion and the root model to decode into."""

    api_version: str
    factory: type[VersionedModel]


@dataclass(frozen=True)
class Versions:
    """Ordered versions of one lineage, oldest first."""

    lineage: Lineage
    entries: tuple[Version, ...]
    _index: MappingProxyType = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError(f"Lineage {self.lineage} has no versions")
        index = {entry.api_version: i for i, entry in enumerate(self.entries)}
        if len(index) != len(self.entries):
            raise ValueError(f"Lineage {self.lineage} registers a version twice")
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def from_modules(cls, lineage: Lineage, modules: Iterable[ModuleType]) -> "Versions":
        """Register version modules in the given order."""
        return cls(lineage, tuple(Version(m.VERSION, m.SkaffoldConfig) for m in modules))

    def __contains__(self, api_version: object) -> bool:
        return api_version in self._index

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, api_version: str) -> tuple[type[VersionedModel] | None, bool]:
        """Return the root model registered for ``api_version`` and whether it exists."""
        if api_version not in self._index:
            return None, False
        return self.entries[self._index[api_version]].factory, True

    def all_versions(self) -> tuple[str, ...]:
        return tuple(entry.api_version for entry in self.entries)

    @property
    def terminal(self) -> str:
        return self.entries[-1].api_version

    def index_of(self, api_version: str) -> int:
        if api_version not in self._index:
            raise UnknownVersionError(api_version)
        return self._index[api_version]

    def next_of(self, api_version: str) -> str | None:
        """Return the version following ``api_version``, or None at the terminal."""
        index = self.index_of(api_version) + 1
        if index == len(self.entries):
            return None
        return self.entries[index].api_version


class VersionRegistry:
    """Manages configuration versions across both lineages.

    The registry is read-only once built: lookups go through an immutable
    mapping and the per-lineage order is kept in tuples.
    """

    def __init__(self, v1_versions: Versions, v2_versions: Versions):
        """Initialize the version registry.

        Args:
            v1_versions: Versions of the v1 lineage, oldest first
            v2_versions: Versions of the v2 lineage, oldest first

        Raises:
            ValueError: If a version is registered in both lineages
        """
        self._lineages = MappingProxyType({Lineage.V1: v1_versions, Lineage.V2: v2_versions})
        owners: dict[str, Lineage] = {}
        for lineage, versions in self._lineages.items():
            for api_version in versions.all_versions():
                if api_version in owners:
                    raise ValueError(
                        f"{api_version} is registered in both {owners[api_version]} and {lineage}"
                    )
                owners[api_version] = lineage
        self._owners = MappingProxyType(owners)

    def find(self, api_version: str) -> tuple[type[VersionedModel] | None, bool]:
        """Find the root model registered for ``api_version`` in either lineage."""
        lineage = self._owners.get(api_version)
        if lineage is None:
            return None, False
        return self._lineages[lineage].find(api_version)

    def get_version(self, api_version: str) -> type[VersionedModel]:
        """Get the root model for a specific version.

        Raises:
            UnknownVersionError: If the version is not registered
        """
        factory, found = self.find(api_version)
        if not found:
            raise UnknownVersionError(api_version)
        return factory

    def is_known(self, api_version: str) -> bool:
        return api_version in self._owners

    def lineage_of(self, api_version: str) -> Lineage:
        """Return the lineage owning ``api_version``.

        Raises:
            UnknownVersionError: If the version is not registered
        """
        if api_version not in self._owners:
            raise UnknownVersionError(api_version)
        return self._owners[api_version]

    def versions_of(self, lineage: Lineage) -> Versions:
        return self._lineages[lineage]

    def all_versions_of(self, lineage: Lineage) -> tuple[str, ...]:
        return self._lineages[lineage].all_versions()

    def terminal_of(self, lineage: Lineage) -> str:
        return self._lineages[lineage].terminal

    def is_newer(self, api_version: str, than: str) -> bool:
        """Return whether ``api_version`` comes after ``than`` in their shared lineage."""
        versions = self._lineages[self.lineage_of(than)]
        return versions.index_of(api_version) > versions.index_of(than)

    def get_upgrade_path(self, from_version: str, to_version: str) -> list[str]:
        """Get the versions a document passes through between two versions.

        Args:
            from_version: Starting version
            to_version: Target version in the same lineage

        Returns:
            list[str]: Versions after ``from_version`` up to and including ``to_version``
        """
        versions = self._lineages[self.lineage_of(to_version)]
        start = versions.index_of(from_version)
        end = versions.index_of(to_version)
        return list(versions.all_versions()[start + 1 : end + 1])


@functools.cache
def default_registry() -> VersionRegistry:
    """Build the registry of every version this release understands."""
    return VersionRegistry(
        Versions.from_modules(
            Lineage.V1,
            (
                v1alpha1,
                v1alpha2,
                v1alpha3,
                v1alpha4,
                v1alpha5,
                v1beta1,
                v1beta2,
                v1beta3,
                v1beta4,
                v1beta5,
                v1beta6,
                v1,
                v2alpha1,
                v2beta1,
            ),
        ),
        Versions.from_modules(Lineage.V2, (v3alpha1, v3beta1, v3, v4beta1)),
    )
