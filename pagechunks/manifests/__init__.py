"""Chunk graph walking and manifest assets."""

from .generator import ChunkWalk, walk_chunk_graph
from .models import PageManifest
from .writer import finalize_assets

__all__ = [
    "ChunkWalk",
    "PageManifest",
    "finalize_assets",
    "walk_chunk_graph",
]
