"""Template asset providers.

An asset provider loads a template by identifier and returns its text, or
``None`` when no such asset exists. The embedder only depends on this
capability, so tests can hand it synthetic templates.
"""
from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Mapping, Optional, Protocol

# Bundled template shipped next to this module
DEFAULT_TEMPLATE = "index.html"


class AssetProvider(Protocol):
    def load(self, identifier: str) -> Optional[str]:
        ...


class PackageAssetProvider:
    """Load templates bundled as package resources (read-only)."""

    def __init__(self, package: str = "reportr.assets") -> None:
        self.package = package

    def load(self, identifier: str) -> Optional[str]:
        resource = resources.files(self.package).joinpath(identifier)
        if not resource.is_file():
            return None
        # Decode bytes ourselves: text mode would translate newlines
        return resource.read_bytes().decode("utf-8")

    def __repr__(self) -> str:
        return f"PackageAssetProvider({self.package!r})"


class DirectoryAssetProvider:
    """Load templates from files under a directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def load(self, identifier: str) -> Optional[str]:
        path = self.root / identifier
        if not path.is_file():
            return None
        return path.read_bytes().decode("utf-8")

    def __repr__(self) -> str:
        return f"DirectoryAssetProvider({str(self.root)!r})"


class StaticAssetProvider:
    """Serve templates from an in-memory mapping."""

    def __init__(self, templates: Mapping[str, str]) -> None:
        self.templates = dict(templates)

    def load(self, identifier: str) -> Optional[str]:
        return self.templates.get(identifier)

    def __repr__(self) -> str:
        return f"StaticAssetProvider({sorted(self.templates)!r})"
