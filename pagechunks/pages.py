"""Discover page modules and derive their logical names."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Sequence

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PAGES_DIRS: tuple[str, ...] = ("src/pages",)
DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".mjs", ".ts", ".tsx")

_EXCLUDED_DIRS = {"node_modules", "__tests__", "__mocks__"}
_EXCLUDED_MARKERS = (".test.", ".spec.", ".stories.")

FileLister = Callable[[Path], Iterable[Path]]


@dataclass(frozen=True, slots=True)
class PageEntry:
    """A routable page module and the name the runtime looks it up by."""

    logical_name: str
    module_path: Path


def list_files(root: Path) -> Iterable[Path]:
    """Default file listing: every regular file below ``root``."""
    if not root.is_dir():
        logger.debug("Pages directory %s does not exist; skipping.", root)
        return []
    return (path for path in root.rglob("*") if path.is_file())


def normalize_roots(root_dirs: Sequence[str | os.PathLike[str]], context: Path | None = None) -> list[Path]:
    """Interpret configured page roots as absolute directory references.

    Existence is not checked here; a missing root simply contributes no pages.
    """
    if isinstance(root_dirs, (str, bytes)) or not root_dirs:
        raise ConfigurationError("At least one pages directory must be configured.")

    base = Path(context) if context is not None else Path.cwd()
    roots: list[Path] = []
    for value in root_dirs:
        if not isinstance(value, (str, os.PathLike)):
            raise ConfigurationError(f"Pages directory must be a path, got {type(value).__name__}: {value!r}")
        text = os.fspath(value)
        if not isinstance(text, str) or not text.strip():
            raise ConfigurationError(f"Pages directory must be a non-empty path, got {value!r}")
        candidate = Path(text)
        roots.append(candidate if candidate.is_absolute() else (base / candidate).resolve())
    return roots


def derive_logical_name(relative: PurePosixPath) -> str:
    """Map a page file path (relative to its root) to its manifest key."""
    parts = list(relative.with_suffix("").parts)
    if len(parts) > 1 and parts[-1] == "index":
        parts.pop()
    return "/".join(parts)


def resolve_pages(
    root_dirs: Sequence[str | os.PathLike[str]],
    *,
    context: Path | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    lister: FileLister = list_files,
) -> list[PageEntry]:
    """Resolve every page module under ``root_dirs``, sorted by logical name."""
    roots = normalize_roots(root_dirs, context)
    suffixes = {ext.lower() for ext in extensions}

    seen: dict[str, PageEntry] = {}
    for root in roots:
        for path in sorted(lister(root)):
            try:
                relative = PurePosixPath(Path(path).relative_to(root).as_posix())
            except ValueError:
                logger.warning("File %s is outside pages directory %s; ignoring.", path, root)
                continue
            if not _is_page_candidate(relative, suffixes):
                continue
            if not _is_loadable(Path(path)):
                continue

            entry = PageEntry(logical_name=derive_logical_name(relative), module_path=Path(path))
            previous = seen.get(entry.logical_name)
            if previous is not None:
                raise ConfigurationError(
                    f"Page name '{entry.logical_name}' is produced by both "
                    f"{previous.module_path} and {entry.module_path}."
                )
            seen[entry.logical_name] = entry

    pages = sorted(seen.values(), key=lambda item: item.logical_name)
    logger.info("Resolved %d page(s) from %d director(ies).", len(pages), len(roots))
    return pages


def _is_page_candidate(relative: PurePosixPath, suffixes: set[str]) -> bool:
    if relative.suffix.lower() not in suffixes:
        return False
    if any(part in _EXCLUDED_DIRS or part.startswith(".") for part in relative.parts):
        return False
    return not any(marker in relative.name for marker in _EXCLUDED_MARKERS)


def _is_loadable(path: Path) -> bool:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping page %s: cannot be read as a module (%s).", path, exc)
        return False
    if not text.strip():
        logger.warning("Skipping page %s: file is empty.", path)
        return False
    return True
