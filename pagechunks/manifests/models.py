"""Pydantic model describing the pages manifest."""

from __future__ import annotations

import json

from pydantic import RootModel


class PageManifest(RootModel[dict[str, str]]):
    """Logical page name to emitted asset filename."""

    def serialize(self) -> str:
        """Render stable, human-diffable JSON (sorted keys, 4-space indent)."""
        return json.dumps(self.root, ensure_ascii=False, indent=4, sort_keys=True) + "\n"
