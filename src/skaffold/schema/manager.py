"""Configuration parsing and upgrading with version support."""

import functools
import logging
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import yaml

from skaffold.schema import compatibility, parser
from skaffold.schema.errors import ConfigNotFoundError, MalformedConfigError
from skaffold.schema.registry import VersionRegistry, default_registry
from skaffold.schema.upgrade import upgrade_to_terminal, upgrade_until
from skaffold.schema.util import VersionedConfig, VersionedModel

logger = logging.getLogger(__name__)


class Defaulter(Protocol):
    """Fills unset optional fields of a canonical document in place."""

    def set(self, config: VersionedConfig) -> None: ...


class SchemaManager:
    """Manages configuration parsing, upgrading and serialization."""

    def __init__(self, registry: VersionRegistry | None = None):
        """Initialize SchemaManager.

        Args:
            registry: Optional VersionRegistry instance. If None, uses the default registry.
        """
        self.registry = registry or default_registry()

    def parse_config(self, path: str | Path) -> list[VersionedModel]:
        """Decode every document of a file at its declared version, without upgrading.

        Returns:
            list[VersionedModel]: Decoded documents in file order
        """
        return parser.parse_documents(self._read(path), self.registry, str(path))

    def parse_config_and_upgrade(self, path: str | Path) -> list[VersionedConfig]:
        """Decode a file and upgrade each document to the latest version of its lineage.

        All documents of the file must belong to the same lineage. The first
        document that fails to decode or upgrade aborts the whole file.

        Returns:
            list[VersionedConfig]: Upgraded documents in file order
        """
        configs = self.parse_config(path)
        if not configs:
            logger.info("No config documents in %s", path)
            return []

        target = self.get_latest_from_compatibility_check(configs)
        upgraded = [upgrade_to_terminal(config, self.registry) for config in configs]

        logger.info("Parsed %d config document(s) from %s at %s", len(upgraded), path, target)
        return upgraded

    def upgrade_to(
        self, configs: Sequence[VersionedConfig], target: str
    ) -> list[VersionedConfig]:
        """Upgrade already decoded documents to exactly ``target``.

        The input documents are left untouched.

        Raises:
            IncompatibleVersionsError: If a document belongs to another lineage than ``target``
            DowngradeError: If a document is already newer than ``target``
        """
        self.is_compatible_with(configs, target)
        return [upgrade_until(config, target, self.registry) for config in configs]

    def get_latest_from_compatibility_check(self, configs: Sequence[VersionedConfig]) -> str:
        return compatibility.get_latest_from_compatibility_check(configs, self.registry)

    def is_compatible_with(self, configs: Sequence[VersionedConfig], target: str) -> list[str]:
        """Check, without upgrading, that every document can be upgraded to ``target``."""
        return compatibility.is_compatible_with(configs, target, self.registry)

    def is_skaffold_config(self, path: str | Path) -> bool:
        return parser.is_skaffold_config(path, self.registry)

    def marshal(self, config: VersionedModel) -> str:
        """Serialize one document to YAML, leaving out fields at their zero value."""
        data = config.model_dump(by_alias=True, exclude_none=True, exclude_defaults=True)
        data = {"apiVersion": config.get_version(), "kind": config.kind, **data}
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def marshal_all(self, configs: Sequence[VersionedModel]) -> str:
        return "---\n".join(self.marshal(config) for config in configs)

    def unmarshal(self, text: str, source: str = "<string>") -> VersionedModel:
        """Decode a single YAML document at its declared version.

        Raises:
            MalformedConfigError: If the text does not hold exactly one document
        """
        configs = parser.parse_documents(text, self.registry, source)
        if len(configs) != 1:
            raise MalformedConfigError(source, f"expected one document, found {len(configs)}")
        return configs[0]

    def save(
        self, configs: Sequence[VersionedModel], path: str | Path, backup: bool = True
    ) -> None:
        """Write documents to a file, keeping a backup of the previous content.

        Raises:
            PermissionError: If the file cannot be written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            backup_path = path.with_name(path.name + ".backup")
            try:
                shutil.copy2(path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        path.write_text(self.marshal_all(configs), encoding="utf-8")
        logger.info("Configuration saved successfully to %s", path)

    def apply_defaults(
        self, configs: Sequence[VersionedConfig], defaulter: Defaulter
    ) -> list[VersionedConfig]:
        """Hand upgraded documents to the defaulting stage, in order.

        The first document the defaulter rejects aborts the batch.
        """
        for config in configs:
            defaulter.set(config)
        return list(configs)

    def _read(self, path: str | Path) -> str:
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(str(path))
        return path.read_text(encoding="utf-8")


@functools.cache
def _default_manager() -> SchemaManager:
    return SchemaManager(default_registry())


def parse_config(path: str | Path) -> list[VersionedModel]:
    return _default_manager().parse_config(path)


def parse_config_and_upgrade(path: str | Path) -> list[VersionedConfig]:
    return _default_manager().parse_config_and_upgrade(path)


def upgrade_to(configs: Sequence[VersionedConfig], target: str) -> list[VersionedConfig]:
    return _default_manager().upgrade_to(configs, target)


def is_compatible_with(configs: Sequence[VersionedConfig], target: str) -> list[str]:
    return _default_manager().is_compatible_with(configs, target)


def is_skaffold_config(path: str | Path) -> bool:
    return _default_manager().is_skaffold_config(path)
