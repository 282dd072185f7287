from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagechunks.config import PageChunksConfig
from pagechunks.errors import ConfigurationError, InvariantViolation
from pagechunks.plugin import PageChunksPlugin
from tests._fixtures.host import FakeHost, write_page

ENTRY = "__pages_entry__"


def _plugin(**kwargs: object) -> PageChunksPlugin:
    return PageChunksPlugin(PageChunksConfig(pages_dirs=["pages"]), **kwargs)  # type: ignore[arg-type]


def test_build_emits_manifest_and_drops_virtual_entry(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    write_page(tmp_path / "pages", "catalog/index.js")
    host = FakeHost(tmp_path)
    _plugin().apply(host)

    compilation = host.build(ENTRY)

    manifest = json.loads(compilation.assets["pages-manifest.json"])
    assert set(manifest) == {"home", "catalog"}
    assert all(filename in compilation.assets for filename in manifest.values())
    assert "entry.xyz.js" not in compilation.assets
    assert "main.js" in compilation.assets


def test_build_registers_virtual_entry_without_touching_disk(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    host = FakeHost(tmp_path)
    _plugin().apply(host)

    assert ENTRY in host.entry  # type: ignore[operator]
    host.build(ENTRY)

    assert "webpackChunkName" in host.sources[ENTRY]
    assert sorted(p.name for p in tmp_path.rglob("*") if p.is_file()) == ["home.js"]


def test_missing_page_chunk_fails_the_build(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    write_page(tmp_path / "pages", "pricing.js")
    host = FakeHost(tmp_path)
    _plugin().apply(host)

    with pytest.raises(InvariantViolation, match="pricing") as excinfo:
        host.build(ENTRY, drop=("pricing",))

    assert excinfo.value.missing == ["pricing"]


def test_colliding_pages_fail_before_bundling(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    write_page(tmp_path / "pages", "home/index.js")
    host = FakeHost(tmp_path)

    with pytest.raises(ConfigurationError, match="home"):
        _plugin().apply(host)

    assert host.entry == {"main": "./src/index.js"}
    assert host.loaders == {}
    assert host.taps == {}


def test_loader_failure_recorded_by_host_still_fails_emit(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    host = FakeHost(tmp_path)
    _plugin().apply(host)
    write_page(tmp_path / "pages", "home/index.js")

    with pytest.raises(ConfigurationError, match="home"):
        host.build(ENTRY)

    assert len(host.module_errors) == 1


def test_rebuild_with_cached_entry_module_keeps_manifest(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    host = FakeHost(tmp_path)
    _plugin().apply(host)
    host.build(ENTRY)

    compilation = host.build(ENTRY, reuse_entry=True)

    assert json.loads(compilation.assets["pages-manifest.json"]).keys() == {"home"}
    assert "entry.xyz.js" not in compilation.assets


def test_empty_pages_directory_yields_empty_manifest(tmp_path: Path) -> None:
    (tmp_path / "pages").mkdir()
    host = FakeHost(tmp_path)
    _plugin().apply(host)

    compilation = host.build(ENTRY)

    assert json.loads(compilation.assets["pages-manifest.json"]) == {}


def test_apply_requires_named_entries(tmp_path: Path) -> None:
    host = FakeHost(tmp_path, entry="./src/index.js")

    with pytest.raises(ConfigurationError):
        _plugin().apply(host)


def test_manifest_filename_collision_is_reported(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    host = FakeHost(tmp_path)
    _plugin().apply(host)

    with pytest.raises(ConfigurationError, match="collides"):
        host.build(ENTRY, extra_assets={"pages-manifest.json": "{\"unrelated\": true}"})


def test_rebuild_resolves_pages_again(tmp_path: Path) -> None:
    write_page(tmp_path / "pages", "home.js")
    host = FakeHost(tmp_path)
    plugin = _plugin(manifest_filename="routes.json")
    plugin.apply(host)

    first = host.build(ENTRY)
    assert plugin.pages is None
    write_page(tmp_path / "pages", "about.js")
    second = host.build(ENTRY)

    assert set(json.loads(first.assets["routes.json"])) == {"home"}
    assert set(json.loads(second.assets["routes.json"])) == {"about", "home"}
