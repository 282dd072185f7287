"""Narrow view of the bundler that the page chunk pipeline relies on."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, MutableMapping, Protocol, Sequence, Union

AssetContent = Union[str, bytes]
AssetSet = MutableMapping[str, AssetContent]

# Loaders receive the parsed query of a virtual module reference and return module source.
VirtualLoader = Callable[[Mapping[str, str]], str]

COMPILE_PHASE = "compile"
EMIT_PHASE = "emit"


@dataclass(frozen=True, slots=True)
class BuildChunk:
    """Output unit produced by the bundler."""

    id: str
    name: str | None
    files: tuple[str, ...] = ()

    @property
    def primary_file(self) -> str | None:
        """First emitted file in the bundler's own ordering."""
        return self.files[0] if self.files else None


class ChunkGraph(Protocol):
    def chunk_by_name(self, name: str) -> BuildChunk | None: ...

    def split_children(self, chunk: BuildChunk) -> Sequence[BuildChunk]: ...


class Compilation(Protocol):
    graph: ChunkGraph
    assets: AssetSet


class BuildHost(Protocol):
    """Bundler surface consumed before and during a build."""

    context: Path
    entry: object

    def register_loader(self, name: str, loader: VirtualLoader) -> None: ...

    def tap(self, phase: str, name: str, callback: Callable[..., None]) -> None: ...
