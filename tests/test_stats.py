from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagechunks.errors import ConfigurationError
from pagechunks.manifests import finalize_assets, walk_chunk_graph
from pagechunks.stats import DirectoryAssetSet, StatsChunkGraph

STATS = {
    "chunks": [
        {"id": 0, "names": ["main"], "files": ["main.js"], "children": []},
        {"id": 1, "names": ["__pages_entry__"], "files": ["entry.xyz.js"], "children": [2, 3]},
        {"id": 2, "names": ["home"], "files": ["home.abc123.js", "home.abc123.js.map"], "children": [4]},
        {"id": 3, "names": ["catalog"], "files": ["catalog.def456.js"], "children": []},
        {"id": 4, "names": [], "files": ["4.lazy.js"], "children": []},
    ]
}


def test_stats_graph_exposes_split_children() -> None:
    graph = StatsChunkGraph.from_dict(STATS)
    root = graph.chunk_by_name("__pages_entry__")

    assert root is not None
    assert [child.name for child in graph.split_children(root)] == ["home", "catalog"]
    home = graph.chunk_by_name("home")
    assert home is not None and home.files == ("home.abc123.js", "home.abc123.js.map")


def test_stats_graph_rejects_payload_without_chunks(tmp_path: Path) -> None:
    path = tmp_path / "stats.json"
    path.write_text(json.dumps({"assets": []}), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        StatsChunkGraph.from_file(path)


def test_directory_asset_set_finalize(tmp_path: Path) -> None:
    out = tmp_path / "dist"
    out.mkdir()
    for name in ("main.js", "entry.xyz.js", "home.abc123.js", "home.abc123.js.map", "catalog.def456.js"):
        (out / name).write_text("//", encoding="utf-8")
    graph = StatsChunkGraph.from_dict(STATS)

    walk = walk_chunk_graph(graph, "__pages_entry__", {"home", "catalog"})
    assets = DirectoryAssetSet(out)
    finalize_assets(assets, walk.root, walk.manifest, "pages-manifest.json")
    finalize_assets(assets, walk.root, walk.manifest, "pages-manifest.json")

    assert sorted(assets) == [
        "catalog.def456.js",
        "home.abc123.js",
        "home.abc123.js.map",
        "main.js",
        "pages-manifest.json",
    ]
    manifest = json.loads((out / "pages-manifest.json").read_text(encoding="utf-8"))
    assert manifest == {"home": "home.abc123.js", "catalog": "catalog.def456.js"}


def test_directory_asset_set_stays_inside_root(tmp_path: Path) -> None:
    assets = DirectoryAssetSet(tmp_path / "dist")

    with pytest.raises(KeyError):
        assets["../outside.js"] = "//"


@pytest.mark.parametrize("entry", ["main", 3, None, ["main.js"]])
def test_stats_graph_rejects_non_object_chunk_entries(entry: object) -> None:
    with pytest.raises(ConfigurationError, match="entry #1"):
        StatsChunkGraph.from_dict({"chunks": [{"id": 0, "names": ["main"]}, entry]})
