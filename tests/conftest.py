from collections.abc import Callable
from pathlib import Path

import pytest

from skaffold.schema import SchemaManager, VersionRegistry
from skaffold.schema.registry import default_registry


@pytest.fixture
def registry() -> VersionRegistry:
    """Provide the registry of every known configuration version."""
    return default_registry()


@pytest.fixture
def manager(registry: VersionRegistry) -> SchemaManager:
    """Provide a SchemaManager backed by the default registry."""
    return SchemaManager(registry)


@pytest.fixture
def document() -> Callable[..., str]:
    """Build the text of one config document from its version and body."""

    def _document(api_version: str, body: str = "") -> str:
        return f"apiVersion: {api_version}\nkind: Config\n" + body.lstrip("\n")

    return _document


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write documents to a temporary skaffold.yaml, separated by ``---``."""

    def _write(*documents: str, name: str = "skaffold.yaml") -> Path:
        path = tmp_path / name
        path.write_text("\n---\n".join(documents), encoding="utf-8")
        return path

    return _write
