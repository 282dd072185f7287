"""Register the virtual pages entry with the host build configuration."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping

from .errors import ConfigurationError
from .host import BuildHost

logger = logging.getLogger(__name__)


def register_entry(host: BuildHost, entry_name: str, reference: str) -> None:
    """Add ``reference`` to the host's named entry points under ``entry_name``.

    String or list entries cannot carry a second named entry point, so they are
    rejected instead of being silently left unsplit.
    """
    entry = host.entry
    if not isinstance(entry, MutableMapping):
        raise ConfigurationError(
            f"Page chunk splitting requires the build 'entry' to be a mapping of named entry points, "
            f"got {type(entry).__name__}."
        )

    existing = entry.get(entry_name)
    if existing is not None and existing != reference:
        raise ConfigurationError(
            f"Entry point '{entry_name}' is already registered with a different module: {existing!r}"
        )

    entry[entry_name] = reference
    logger.debug("Registered virtual entry '%s' -> %s", entry_name, reference)
