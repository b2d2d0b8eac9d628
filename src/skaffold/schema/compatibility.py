"""Decide which version a batch of documents can be upgraded to together."""

from collections.abc import Sequence

from skaffold.schema.errors import DowngradeError, IncompatibleVersionsError
from skaffold.schema.registry import Lineage, VersionRegistry
from skaffold.schema.util import VersionedConfig


def _format(versions: list[str]) -> str:
    return "[" + " ".join(versions) + "]"


def group_by_lineage(
    configs: Sequence[VersionedConfig], registry: VersionRegistry
) -> dict[Lineage, list[str]]:
    """Group the distinct versions of a batch by lineage, in first-seen order.

    Raises:
        UnknownVersionError: If a document's version is not registered
    """
    groups: dict[Lineage, list[str]] = {lineage: [] for lineage in Lineage}
    for config in configs:
        api_version = config.get_version()
        group = groups[registry.lineage_of(api_version)]
        if api_version not in group:
            group.append(api_version)
    return groups


def get_latest_from_compatibility_check(
    configs: Sequence[VersionedConfig], registry: VersionRegistry
) -> str:
    """Return the version every document of the batch should be upgraded to.

    That is the latest version of the lineage all documents belong to, whichever
    of its versions are actually present. An empty batch targets the current
    version.

    Raises:
        UnknownVersionError: If a document's version is not registered
        IncompatibleVersionsError: If the batch mixes both lineages
    """
    groups = group_by_lineage(configs, registry)
    v1_versions, v2_versions = groups[Lineage.V1], groups[Lineage.V2]

    if v1_versions and v2_versions:
        raise IncompatibleVersionsError(
            f"detected incompatible versions:{_format(v1_versions)} "
            f"are incompatible with {_format(v2_versions)}",
            {str(lineage): versions for lineage, versions in groups.items()},
        )
    if v1_versions:
        return registry.terminal_of(Lineage.V1)
    return registry.terminal_of(Lineage.V2)


def is_compatible_with(
    configs: Sequence[VersionedConfig], target: str, registry: VersionRegistry
) -> list[str]:
    """Check that every document of the batch can be upgraded to ``target``.

    Returns:
        list[str]: The distinct versions found in the batch

    Raises:
        UnknownVersionError: If ``target`` or a document's version is not registered
        IncompatibleVersionsError: If a document belongs to the other lineage
        DowngradeError: If a document is already newer than ``target``
    """
    target_lineage = registry.lineage_of(target)
    groups = group_by_lineage(configs, registry)

    foreign = [
        v for lineage, versions in groups.items() if lineage != target_lineage for v in versions
    ]
    newer = [v for v in groups[target_lineage] if registry.is_newer(v, target)]

    if foreign:
        message = (
            f"the following versions are incompatible with target version {target}. "
            f"upgrade aborted: {_format(foreign)}"
        )
        if newer:
            message += f"; cannot downgrade {_format(newer)}"
        raise IncompatibleVersionsError(message, {"incompatible": foreign, "newer": newer})
    if newer:
        raise DowngradeError(newer, target)

    return list(dict.fromkeys(config.get_version() for config in configs))
