"""Detection and decoding of raw configuration documents."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skaffold.schema.errors import (
    DecodeError,
    MalformedConfigError,
    MissingVersionError,
    SchemaError,
    UnknownVersionError,
)
from skaffold.schema.registry import VersionRegistry
from skaffold.schema.util import VersionedModel, format_validation_errors

logger = logging.getLogger(__name__)

CONFIG_KIND = "Config"


def load_documents(text: str, source: str = "<string>") -> list[dict[str, Any]]:
    """Load every document of a file as a YAML mapping, in file order.

    Documents holding nothing but whitespace and comments are dropped, so an
    empty file yields no documents.

    Raises:
        MalformedConfigError: On YAML syntax errors or non-mapping content
    """
    try:
        loaded = [data for data in yaml.safe_load_all(text) if data is not None]
    except yaml.YAMLError as exc:
        raise MalformedConfigError(source, f"YAML syntax error: {exc}") from exc

    documents = []
    for position, data in enumerate(loaded, start=1):
        documents.append(_as_mapping(data, f"{source} (document {position})"))
    return documents


def _as_mapping(data: Any, source: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedConfigError(
            source, f"config must be a YAML mapping (got {type(data).__name__})"
        )
    return data


def load_document(document: str, source: str = "<string>") -> dict[str, Any]:
    """Load one document as a YAML mapping.

    Raises:
        MalformedConfigError: On YAML syntax errors or non-mapping content
    """
    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as exc:
        raise MalformedConfigError(source, f"YAML syntax error: {exc}") from exc

    if data is None:
        return {}
    return _as_mapping(data, source)


def read_api_version(data: dict[str, Any], source: str = "<string>") -> str:
    """Return the declared apiVersion of a loaded document.

    Raises:
        MissingVersionError: If apiVersion is absent or empty
        MalformedConfigError: If apiVersion is not a string
    """
    api_version = data.get("apiVersion")
    if api_version is None or api_version == "":
        raise MissingVersionError(source)
    if not isinstance(api_version, str):
        raise MalformedConfigError(source, f"apiVersion must be a string, got {api_version!r}")
    return api_version


def decode_mapping(
    data: dict[str, Any], api_version: str, registry: VersionRegistry, source: str = "<string>"
) -> VersionedModel:
    """Decode a loaded document into the shape registered for ``api_version``.

    Raises:
        UnknownVersionError: If ``api_version`` is not registered
        DecodeError: If the document does not fit that version's shape
    """
    factory, found = registry.find(api_version)
    if not found:
        raise UnknownVersionError(api_version)
    try:
        return factory.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(api_version, source, format_validation_errors(exc)) from exc


def decode(
    document: str, api_version: str, registry: VersionRegistry, source: str = "<string>"
) -> VersionedModel:
    """Decode one raw document at ``api_version``."""
    return decode_mapping(load_document(document, source), api_version, registry, source)


def parse_documents(
    text: str, registry: VersionRegistry, source: str = "<string>"
) -> list[VersionedModel]:
    """Decode every document of a file at its own declared version.

    The first failing document aborts the whole batch.
    """
    configs = []
    for position, data in enumerate(load_documents(text, source), start=1):
        label = f"{source} (document {position})"
        api_version = read_api_version(data, label)
        configs.append(decode_mapping(data, api_version, registry, label))
    return configs


def is_envelope(document: str, registry: VersionRegistry) -> bool:
    """Return whether a document declares ``kind: Config`` and a known apiVersion."""
    try:
        data = load_document(document)
    except SchemaError:
        return False
    return _is_envelope_mapping(data, registry)


def _is_envelope_mapping(data: dict[str, Any], registry: VersionRegistry) -> bool:
    try:
        api_version = read_api_version(data)
    except SchemaError:
        return False
    return data.get("kind") == CONFIG_KIND and registry.is_known(api_version)


def is_skaffold_config(path: str | Path, registry: VersionRegistry) -> bool:
    """Return whether a file holds only recognizable Skaffold config documents.

    Unreadable or foreign files are reported as False, never raised.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s as a Skaffold config: %s", path, exc)
        return False

    try:
        documents = load_documents(text, str(path))
    except SchemaError:
        documents = []
    if documents and all(_is_envelope_mapping(data, registry) for data in documents):
        return True

    logger.warning("%s is not a recognized Skaffold config", path)
    return False
