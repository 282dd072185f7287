"""CLI entrypoints for pagechunks build tooling."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import PageChunksConfig, load_config
from .errors import PageChunksError
from .manifests import finalize_assets, walk_chunk_graph
from .pages import PageEntry, resolve_pages
from .stats import DirectoryAssetSet, StatsChunkGraph
from .virtual import synthesize_entry

console = Console()
app = typer.Typer(help="Split page modules into chunks and publish a pages manifest.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    logger = logging.getLogger("pagechunks")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if verbose and not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


@app.command()
def pages(config_path: ConfigPathOption = ".") -> None:
    """List discovered pages and their logical names."""
    config = _load(config_path)
    entries = _resolve(config)

    if not entries:
        console.print("[bold yellow]No pages found[/] in " + ", ".join(str(p) for p in config.pages_dirs))
        raise typer.Exit()

    table = Table("Page", "Module")
    for entry in entries:
        table.add_row(entry.logical_name, _display_path(entry.module_path, config.context))
    console.print(table)
    console.print(f"[bold blue]Summary[/]: {len(entries)} page(s).")


@app.command()
def entry(config_path: ConfigPathOption = ".") -> None:
    """Print the generated virtual entry module."""
    config = _load(config_path)
    source = synthesize_entry(_resolve(config))
    console.print(source, markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
def finalize(
    stats: Annotated[
        Path,
        typer.Option("--stats", "-s", help="Bundler stats JSON describing emitted chunks."),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory holding the emitted build output."),
    ],
    config_path: ConfigPathOption = ".",
) -> None:
    """Write the pages manifest into a finished build and drop the virtual entry files."""
    config = _load(config_path)
    if not stats.is_file():
        raise typer.BadParameter(f"Stats file not found: {stats}", param_hint="--stats")
    if not output_dir.is_dir():
        raise typer.BadParameter(f"Output directory not found: {output_dir}", param_hint="--output-dir")

    entries = _resolve(config)
    try:
        graph = StatsChunkGraph.from_file(stats)
        walk = walk_chunk_graph(graph, config.entry_name, (item.logical_name for item in entries))
        finalize_assets(DirectoryAssetSet(output_dir), walk.root, walk.manifest, config.manifest_filename)
    except PageChunksError as exc:
        console.print(f"[bold red]Finalize failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        f"[bold green]Manifest written[/]: {output_dir / config.manifest_filename} "
        f"({len(walk.manifest.root)} page(s), removed {len(walk.root.files)} entry file(s))."
    )


def _resolve(config: PageChunksConfig) -> list[PageEntry]:
    try:
        return resolve_pages(config.pages_dirs, context=config.context, extensions=config.extensions)
    except PageChunksError as exc:
        console.print(f"[bold red]Page discovery failed[/]: {exc}")
        raise typer.Exit(code=1) from exc


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _load(path: str) -> PageChunksConfig:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
