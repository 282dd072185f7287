"""Synthesize the virtual entry module that splits every page into a chunk.

The entry is never written to disk. The bundler is handed a reference of the
form ``<loader>?pagesDirs=<a>|<b>!<placeholder>`` and asks the registered
loader to generate the module content from the query arguments.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Iterable, Mapping, Sequence
from urllib.parse import parse_qsl, urlencode

from .errors import ConfigurationError
from .pages import DEFAULT_EXTENSIONS, FileLister, PageEntry, list_files, resolve_pages

LOADER_NAME = "pagechunks-loader"
PLACEHOLDER_RESOURCE = "pagechunks-placeholder.js"
DIR_SEPARATOR = "|"

_HEADER = "// Generated by pagechunks. Each import() below becomes its own page chunk.\n"


def synthesize_entry(pages: Iterable[PageEntry]) -> str:
    """Return entry source with one statically analyzable ``import()`` per page."""
    lines = [_HEADER]
    for page in pages:
        chunk_name = json.dumps(page.logical_name)
        target = json.dumps(page.module_path.as_posix())
        lines.append(f"import(/* webpackChunkName: {chunk_name} */ {target});\n")
    return "".join(lines)


def build_reference(root_dirs: Sequence[Path], *, loader: str = LOADER_NAME) -> str:
    """Encode absolute pages directories into a virtual module reference."""
    joined = DIR_SEPARATOR.join(os.fspath(root) for root in root_dirs)
    if any(DIR_SEPARATOR in os.fspath(root) for root in root_dirs):
        raise ConfigurationError(f"Pages directories may not contain '{DIR_SEPARATOR}': {joined}")
    query = urlencode({"pagesDirs": joined})
    return f"{loader}?{query}!{PLACEHOLDER_RESOURCE}"


def parse_reference(reference: str) -> tuple[str, dict[str, str], str]:
    """Split a reference into ``(loader, query, resource)``."""
    request, bang, resource = reference.partition("!")
    if not bang:
        raise ConfigurationError(f"Virtual module reference has no resource part: {reference!r}")
    loader, _, query_text = request.partition("?")
    return loader, dict(parse_qsl(query_text, keep_blank_values=True)), resource


def query_roots(query: Mapping[str, str]) -> list[Path]:
    raw = query.get("pagesDirs", "")
    return [Path(item) for item in raw.split(DIR_SEPARATOR) if item]


def load_virtual_module(
    query: Mapping[str, str],
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    lister: FileLister = list_files,
) -> tuple[list[PageEntry], str]:
    """Resolve the pages named by a reference query and synthesize the entry."""
    pages = resolve_pages(query_roots(query), extensions=extensions, lister=lister)
    return pages, synthesize_entry(pages)
