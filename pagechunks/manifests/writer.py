"""Emit-phase mutation of the output asset set."""

from __future__ import annotations

import logging

from ..errors import ConfigurationError
from ..host import AssetContent, AssetSet, BuildChunk
from .models import PageManifest

logger = logging.getLogger(__name__)


def finalize_assets(
    assets: AssetSet,
    root_chunk: BuildChunk,
    manifest: PageManifest,
    manifest_filename: str,
) -> None:
    """Drop the virtual entry's own files and add the serialized manifest.

    Preconditions are checked before anything is mutated. Calling this again
    with the same inputs leaves the asset set unchanged.
    """
    payload = manifest.serialize()

    if manifest_filename in root_chunk.files:
        raise ConfigurationError(
            f"Manifest filename '{manifest_filename}' collides with a file of the virtual entry chunk."
        )
    existing = assets.get(manifest_filename)
    if existing is not None and not _same_content(existing, payload):
        raise ConfigurationError(
            f"Manifest filename '{manifest_filename}' collides with an existing build asset."
        )

    for filename in root_chunk.files:
        if assets.pop(filename, None) is not None:
            logger.debug("Removed virtual entry asset %s", filename)

    if existing is None:
        assets[manifest_filename] = payload
    logger.info("Wrote %s with %d page(s).", manifest_filename, len(manifest.root))


def _same_content(existing: AssetContent, payload: str) -> bool:
    if isinstance(existing, bytes):
        return existing == payload.encode("utf-8")
    return existing == payload
