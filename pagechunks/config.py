from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .pages import DEFAULT_EXTENSIONS, DEFAULT_PAGES_DIRS

CONFIG_FILENAME = "pagechunks.yml"
DEFAULT_MANIFEST_FILENAME = "pages-manifest.json"
DEFAULT_ENTRY_NAME = "__pages_entry__"


class PageChunksConfig(BaseModel):
    """Settings supplied to the page chunk pipeline."""

    context: Path = Field(
        default=Path("."),
        description="Project directory that relative pages directories are resolved against.",
    )
    pages_dirs: list[Path] = Field(
        default_factory=lambda: [Path(item) for item in DEFAULT_PAGES_DIRS],
        description="Directories scanned for page modules.",
    )
    manifest_filename: str = Field(
        default=DEFAULT_MANIFEST_FILENAME,
        description="Output asset name of the pages manifest.",
    )
    entry_name: str = Field(
        default=DEFAULT_ENTRY_NAME,
        description="Name of the virtual entry point registered with the bundler.",
    )
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    @field_validator("context", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("pages_dirs", mode="before")
    def _ensure_paths(cls, value: Any) -> list[Path]:
        if isinstance(value, (str, Path)):
            value = [value]
        if not value:
            raise ValueError("pages_dirs must name at least one directory.")
        paths: list[Path] = []
        for item in value:
            if item is None or str(item).strip() == "":
                raise ValueError("pages_dirs entries must be non-empty paths.")
            paths.append(Path(item))
        return paths

    @field_validator("manifest_filename", "entry_name")
    def _non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("extensions")
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for item in value:
            text = item.strip().lower()
            if not text:
                continue
            if not text.startswith("."):
                text = f".{text}"
            normalized.append(text)
        return normalized or list(DEFAULT_EXTENSIONS)


def load_config(path: str | Path) -> PageChunksConfig:
    """Load configuration and resolve relative paths based on the config location.

    ``path`` may point to a ``pagechunks.yml`` file or to a directory. A
    directory without a config file yields the defaults anchored to it.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = PageChunksConfig(**data)
    if not cfg.context.is_absolute():
        cfg.context = (base_dir / cfg.context).resolve()
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} should define a mapping.")
    return data
