"""Chain single-step upgrades until a document reaches its target version."""

import logging

from skaffold.schema.errors import ChainUpgradeError, DowngradeError, UpgradeNotAvailableError
from skaffold.schema.registry import VersionRegistry
from skaffold.schema.util import VersionedConfig

logger = logging.getLogger(__name__)


def _step(config: VersionedConfig, registry: VersionRegistry) -> VersionedConfig:
    """Apply one upgrade step and check it landed on the next version."""
    current = config.get_version()
    upgraded = config.upgrade()

    expected = registry.versions_of(registry.lineage_of(current)).next_of(current)
    if upgraded.get_version() != expected:
        raise ChainUpgradeError(
            current, f"upgrade produced {upgraded.get_version()}, expected {expected}"
        )

    logger.debug("Upgraded config from %s to %s", current, expected)
    return upgraded


def upgrade_to_terminal(config: VersionedConfig, registry: VersionRegistry) -> VersionedConfig:
    """Upgrade a document until it reaches the latest version of its lineage.

    Args:
        config: Decoded document at any registered version
        registry: Registry the document's version belongs to

    Returns:
        VersionedConfig: A new document at the lineage's terminal version, or
        ``config`` itself when it is already there

    Raises:
        ChainUpgradeError: If a step fails before the terminal version is reached
    """
    terminal = registry.terminal_of(registry.lineage_of(config.get_version()))

    current = config
    while True:
        try:
            current = _step(current, registry)
        except UpgradeNotAvailableError as exc:
            if current.get_version() == terminal:
                return current
            raise ChainUpgradeError(current.get_version(), str(exc)) from exc


def upgrade_until(
    config: VersionedConfig, target: str, registry: VersionRegistry
) -> VersionedConfig:
    """Upgrade a document step by step until it reaches ``target``.

    Raises:
        DowngradeError: If the document is already newer than ``target``
        ChainUpgradeError: If a step fails before ``target`` is reached
    """
    if registry.is_newer(config.get_version(), target):
        raise DowngradeError([config.get_version()], target)

    current = config
    for _ in registry.get_upgrade_path(config.get_version(), target):
        try:
            current = _step(current, registry)
        except UpgradeNotAvailableError as exc:
            raise ChainUpgradeError(current.get_version(), str(exc)) from exc
    return current
