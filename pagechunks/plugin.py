"""Bundler plugin wiring page discovery, entry registration and manifest emit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping, Sequence

from .binder import register_entry
from .config import PageChunksConfig
from .host import COMPILE_PHASE, EMIT_PHASE, BuildHost, Compilation
from .manifests import finalize_assets, walk_chunk_graph
from .pages import FileLister, PageEntry, list_files, normalize_roots, resolve_pages
from .virtual import LOADER_NAME, build_reference, load_virtual_module

logger = logging.getLogger(__name__)

PLUGIN_NAME = "PageChunksPlugin"


class PageChunksPlugin:
    """Split every page module into its own chunk and emit a pages manifest."""

    def __init__(
        self,
        config: PageChunksConfig | None = None,
        *,
        pages_dirs: Sequence[str | Path] | None = None,
        manifest_filename: str | None = None,
        lister: FileLister = list_files,
    ) -> None:
        config = config or PageChunksConfig()
        self.pages_dirs: list[str | Path] = list(pages_dirs) if pages_dirs is not None else list(config.pages_dirs)
        self.manifest_filename = manifest_filename or config.manifest_filename
        self.entry_name = config.entry_name
        self.extensions = tuple(config.extensions)
        self._lister = lister
        self._pages: list[PageEntry] | None = None
        self._roots: list[Path] = []

    @property
    def pages(self) -> list[PageEntry] | None:
        """Pages resolved for the build in progress, if the entry has been loaded."""
        return self._pages

    def apply(self, host: BuildHost) -> None:
        roots = normalize_roots(self.pages_dirs, host.context)
        # Name collisions surface here, before the entry is registered.
        self._resolve(roots)
        self._roots = roots
        register_entry(host, self.entry_name, build_reference(roots))
        host.register_loader(LOADER_NAME, self._load_entry)
        host.tap(COMPILE_PHASE, PLUGIN_NAME, self._reset)
        host.tap(EMIT_PHASE, PLUGIN_NAME, self._emit)

    def _resolve(self, roots: Sequence[Path]) -> list[PageEntry]:
        return resolve_pages(roots, extensions=self.extensions, lister=self._lister)

    def _reset(self, *_: object) -> None:
        self._pages = None

    def _load_entry(self, query: Mapping[str, str]) -> str:
        pages, source = load_virtual_module(query, extensions=self.extensions, lister=self._lister)
        self._pages = pages
        return source

    def _emit(self, compilation: Compilation, callback: Callable[[], None] | None = None) -> None:
        try:
            # The host may reuse a cached entry module or record a loader failure
            # and carry on, so the page set is re-resolved when the loader did not run.
            pages = self._pages if self._pages is not None else self._resolve(self._roots)
            walk = walk_chunk_graph(
                compilation.graph,
                self.entry_name,
                (page.logical_name for page in pages),
            )
            finalize_assets(compilation.assets, walk.root, walk.manifest, self.manifest_filename)
        finally:
            self._pages = None
        if callback is not None:
            callback()
