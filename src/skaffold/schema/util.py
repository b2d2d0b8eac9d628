"""Shared building blocks for versioned configuration documents.

Every historical schema version is a set of pydantic models whose root,
``SkaffoldConfig``, derives from :class:`VersionedModel`. Upgrades work on the
camelCase mapping a document dumps to: a version rewrites that mapping into
the shape of its successor and validates it as the successor's root model.
"""

from collections.abc import Iterator
from types import ModuleType
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from skaffold.schema.errors import ChainUpgradeError, UpgradeNotAvailableError


@runtime_checkable
class VersionedConfig(Protocol):
    """A decoded configuration document at exactly one schema version."""

    def get_version(self) -> str:
        """Return the apiVersion this document was decoded at."""
        ...

    def upgrade(self) -> "VersionedConfig":
        """Return a new document at the next version of the lineage."""
        ...


class SchemaModel(BaseModel):
    """Base for all document models: camelCase keys, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        strict=True,
    )


class OneOfModel(SchemaModel):
    """A model whose ``one_of`` fields are mutually exclusive."""

    one_of: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_one_of(self) -> "OneOfModel":
        chosen = [name for name in self.one_of if getattr(self, name) is not None]
        if len(chosen) > 1:
            fields = type(self).model_fields
            keys = ", ".join(fields[name].alias or name for name in chosen)
            raise ValueError(f"only one of [{keys}] may be set")
        return self


class VersionedModel(SchemaModel):
    """Root model shared by every ``SkaffoldConfig`` version."""

    api_version: str
    kind: str = "Config"

    def get_version(self) -> str:
        return self.api_version

    def upgrade(self) -> VersionedConfig:
        raise UpgradeNotAvailableError(self.api_version)

    def to_mapping(self) -> dict[str, Any]:
        """Dump to a fresh camelCase mapping, leaving this document untouched."""
        return self.model_dump(by_alias=True, exclude_none=True)


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Format pydantic errors as ``location: message`` lines."""
    lines = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "(root)"
        lines.append(f"{loc}: {err['msg']}")
    return lines


def pipelines(data: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield the top-level pipeline followed by every profile."""
    yield data
    yield from data.get("profiles", [])


def rename(mapping: dict[str, Any], old: str, new: str) -> None:
    if old in mapping:
        mapping[new] = mapping.pop(old)


def upgrade_into(next_version: ModuleType, data: dict[str, Any], from_version: str) -> Any:
    """Validate an upgraded mapping as the root model of ``next_version``.

    Args:
        next_version: Version module defining ``VERSION`` and ``SkaffoldConfig``
        data: Mapping already rewritten into the next version's shape
        from_version: Version the mapping was upgraded from, for error reporting

    Raises:
        ChainUpgradeError: If the rewritten mapping does not fit the next version
    """
    data["apiVersion"] = next_version.VERSION
    try:
        return next_version.SkaffoldConfig.model_validate(data)
    except ValidationError as exc:
        detail = "; ".join(format_validation_errors(exc))
        raise ChainUpgradeError(
            from_version, f"result does not fit {next_version.VERSION}: {detail}"
        ) from exc
