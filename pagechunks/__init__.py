"""Build-time page chunk splitting and manifest generation."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as load_pkg_version
from pathlib import Path
import tomllib

from .errors import ConfigurationError, InvariantViolation, PageChunksError
from .pages import PageEntry, resolve_pages
from .plugin import PageChunksPlugin

__all__ = [
    "ConfigurationError",
    "InvariantViolation",
    "PageChunksError",
    "PageChunksPlugin",
    "PageEntry",
    "__version__",
    "resolve_pages",
]


def _read_local_project_version() -> str:
    """Read the project version from pyproject.toml when the package is uninstalled."""
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return "0.0.0"
    return data.get("project", {}).get("version", "0.0.0")


try:
    __version__ = load_pkg_version("pagechunks")
except PackageNotFoundError:
    __version__ = _read_local_project_version()
