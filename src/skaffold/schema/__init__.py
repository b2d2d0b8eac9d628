"""Skaffold configuration schema package.

This package provides versioned configuration handling with:
- A registry of every schema version, grouped in two lineages
- Detection and strict decoding of multi-document YAML files
- Step-by-step upgrades to the latest version of a lineage
- Compatibility checks across the documents of a file
"""

from .errors import (
    ChainUpgradeError,
    ConfigNotFoundError,
    DecodeError,
    DowngradeError,
    IncompatibleVersionsError,
    MalformedConfigError,
    MissingVersionError,
    SchemaError,
    UnknownVersionError,
    UpgradeNotAvailableError,
)
from .manager import (
    Defaulter,
    SchemaManager,
    is_compatible_with,
    is_skaffold_config,
    parse_config,
    parse_config_and_upgrade,
    upgrade_to,
)
from .registry import LATEST_V1_VERSION, LATEST_VERSION, Lineage, VersionRegistry
from .util import VersionedConfig

__all__ = [
    "LATEST_V1_VERSION",
    "LATEST_VERSION",
    "ChainUpgradeError",
    "ConfigNotFoundError",
    "DecodeError",
    "Defaulter",
    "DowngradeError",
    "IncompatibleVersionsError",
    "Lineage",
    "MalformedConfigError",
    "MissingVersionError",
    "SchemaError",
    "SchemaManager",
    "UnknownVersionError",
    "UpgradeNotAvailableError",
    "VersionRegistry",
    "VersionedConfig",
    "is_compatible_with",
    "is_skaffold_config",
    "parse_config",
    "parse_config_and_upgrade",
    "upgrade_to",
]
