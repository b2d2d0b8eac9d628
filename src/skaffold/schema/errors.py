"""Exception hierarchy for configuration schema handling."""

from collections.abc import Iterable


def _quoted(versions: Iterable[str]) -> str:
    return ", ".join(f'"{v}"' for v in versions)


class SchemaError(Exception):
    """Base exception for all configuration schema errors."""


class ConfigNotFoundError(SchemaError):
    """Raised when the configuration file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Skaffold config file not found: {path}")


class MalformedConfigError(SchemaError):
    """Raised when a document is not a YAML mapping at all."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"parsing skaffold config {source}: {detail}")


class MissingVersionError(SchemaError):
    """Raised when a document does not declare an apiVersion."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(
            f"missing apiVersion in {source}: fix the apiVersion field of this config"
        )


class UnknownVersionError(SchemaError):
    """Raised when an apiVersion is not registered in any lineage."""

    def __init__(self, api_version: str):
        self.api_version = api_version
        super().__init__(
            f"unknown apiVersion {api_version!r}: fix the apiVersion field "
            "or upgrade Skaffold to a release that supports it"
        )


class DecodeError(SchemaError):
    """Raised when a document does not fit the shape of its declared version."""

    def __init__(self, api_version: str, source: str, errors: list[str]):
        self.api_version = api_version
        self.source = source
        self.errors = errors
        lines = [f"unable to parse config {source} as {api_version}:"]
        lines.extend(f"  {error}" for error in errors)
        super().__init__("\n".join(lines))


class UpgradeNotAvailableError(SchemaError):
    """Raised when upgrading a document that has no successor version."""

    def __init__(self, api_version: str):
        self.api_version = api_version
        super().__init__(
            f"{api_version} is the latest version of its lineage: no upgrade available"
        )


class ChainUpgradeError(SchemaError):
    """Raised when a single upgrade step cannot transform a document."""

    def __init__(self, api_version: str, detail: str):
        self.api_version = api_version
        self.detail = detail
        super().__init__(f"upgrading config from {api_version}: {detail}")


class IncompatibleVersionsError(SchemaError):
    """Raised when a batch of documents spans both lineages."""

    def __init__(self, message: str, groups: dict[str, list[str]]):
        self.groups = groups
        super().__init__(message)


class DowngradeError(SchemaError):
    """Raised when a document is already newer than the requested target."""

    def __init__(self, api_versions: list[str], target: str):
        self.api_versions = api_versions
        self.target = target
        noun = "version" if len(api_versions) == 1 else "versions"
        verb = "is" if len(api_versions) == 1 else "are"
        super().__init__(
            f"config {noun} {_quoted(api_versions)} {verb} more recent than "
            f'target version "{target}": upgrade Skaffold'
        )
