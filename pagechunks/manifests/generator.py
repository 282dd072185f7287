"""Recover the page manifest from the compiled chunk graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..errors import InvariantViolation
from ..host import BuildChunk, ChunkGraph
from .models import PageManifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChunkWalk:
    """Root chunk of the virtual entry and the manifest built from its split children."""

    root: BuildChunk
    manifest: PageManifest


def walk_chunk_graph(graph: ChunkGraph, entry_name: str, expected_names: Iterable[str]) -> ChunkWalk:
    """Map every page split off the virtual entry to its primary emitted file.

    Only direct split children of the root chunk are considered; dynamic loads
    nested inside a page belong to that page. When a chunk emits several files
    the first one in the bundler's ordering is used and the rest (source maps,
    extracted styles) are not represented in the manifest.
    """
    root = graph.chunk_by_name(entry_name)
    if root is None:
        raise InvariantViolation(f"Could not find the virtual pages entry chunk '{entry_name}'.")

    mapping: dict[str, str] = {}
    unnamed: list[str] = []
    for child in graph.split_children(root):
        if not child.name:
            unnamed.append(f"<chunk {child.id}>")
            continue
        primary = child.primary_file
        if primary is None:
            raise InvariantViolation(f"Page chunk '{child.name}' did not emit any files.")
        if child.name in mapping:
            raise InvariantViolation(f"Page chunk '{child.name}' was emitted more than once.")
        mapping[child.name] = primary

    expected = set(expected_names)
    found = set(mapping)
    if found != expected or unnamed:
        raise InvariantViolation(
            "Page chunks do not match the resolved pages",
            missing=expected - found,
            unexpected=(found - expected) | set(unnamed),
        )

    logger.info("Collected %d page chunk(s) from entry '%s'.", len(mapping), entry_name)
    return ChunkWalk(root=root, manifest=PageManifest(mapping))
