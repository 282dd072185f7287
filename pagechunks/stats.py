"""Offline host adapter driven by a bundler stats file and an output directory."""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Iterator, Sequence

from .errors import ConfigurationError
from .host import AssetContent, BuildChunk

logger = logging.getLogger(__name__)


class StatsChunkGraph:
    """Chunk graph read from webpack-style stats JSON (``{"chunks": [...]}``)."""

    def __init__(self, chunks: Sequence[BuildChunk], children: dict[str, list[str]]) -> None:
        self._by_id = {chunk.id: chunk for chunk in chunks}
        self._order = [chunk.id for chunk in chunks]
        self._children = children

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "StatsChunkGraph":
        raw_chunks = payload.get("chunks")
        if not isinstance(raw_chunks, list):
            raise ConfigurationError("Stats data does not contain a 'chunks' list.")

        chunks: list[BuildChunk] = []
        children: dict[str, list[str]] = {}
        for index, raw in enumerate(raw_chunks):
            if not isinstance(raw, dict):
                raise ConfigurationError(f"Stats chunk entry #{index} should be a JSON object, got {type(raw).__name__}.")
            chunk_id = str(raw.get("id"))
            names = raw.get("names") or ([raw["name"]] if raw.get("name") else [])
            chunks.append(
                BuildChunk(
                    id=chunk_id,
                    name=names[0] if names else None,
                    files=tuple(str(item) for item in raw.get("files") or []),
                )
            )
            children[chunk_id] = [str(item) for item in raw.get("children") or []]
        return cls(chunks, children)

    @classmethod
    def from_file(cls, path: Path) -> "StatsChunkGraph":
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Stats file {path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Stats file {path} should contain a JSON object.")
        return cls.from_dict(payload)

    def chunk_by_name(self, name: str) -> BuildChunk | None:
        for chunk_id in self._order:
            chunk = self._by_id[chunk_id]
            if chunk.name == name:
                return chunk
        return None

    def split_children(self, chunk: BuildChunk) -> list[BuildChunk]:
        result: list[BuildChunk] = []
        for child_id in self._children.get(chunk.id, []):
            child = self._by_id.get(child_id)
            if child is None:
                logger.warning("Chunk %s lists unknown child chunk %s.", chunk.id, child_id)
                continue
            result.append(child)
        return result


class DirectoryAssetSet(MutableMapping[str, AssetContent]):
    """Built files under ``root`` keyed by POSIX path relative to it."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _path(self, name: str) -> Path:
        candidate = (self.root / name).resolve()
        try:
            candidate.relative_to(self.root.resolve())
        except ValueError:
            raise KeyError(name) from None
        return candidate

    def __getitem__(self, name: str) -> bytes:
        path = self._path(name)
        if not path.is_file():
            raise KeyError(name)
        return path.read_bytes()

    def __setitem__(self, name: str, value: AssetContent) -> None:
        path = self._path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(value, str):
            path.write_text(value, encoding="utf-8")
        else:
            path.write_bytes(value)

    def __delitem__(self, name: str) -> None:
        path = self._path(name)
        if not path.is_file():
            raise KeyError(name)
        path.unlink()

    def __iter__(self) -> Iterator[str]:
        if not self.root.exists():
            return iter(())
        return iter(
            sorted(path.relative_to(self.root).as_posix() for path in self.root.rglob("*") if path.is_file())
        )

    def __len__(self) -> int:
        return sum(1 for _ in self)
