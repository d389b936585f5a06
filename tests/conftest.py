"""Shared pytest fixtures for statichash tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from statichash import StaticAssets, StaticConfig

# Fixed mtimes so Last-Modified and conditional requests are predictable
OLD_MTIME = 1_600_000_000
NEW_MTIME = 1_700_000_000


def write_asset(root: Path, name: str, content: str | bytes, mtime: int = OLD_MTIME) -> Path:
    """Write ``content`` to ``root/name`` and pin its modification time."""
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        path.write_text(content)
    else:
        path.write_bytes(content)
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture()
def asset_writer():
    """Return the asset writing helper for tests that build their own files."""
    return write_asset


@pytest.fixture()
def static_dir(tmp_path: Path) -> Path:
    """Create a static root with stylesheets, scripts and an image."""
    root = tmp_path / "public"
    root.mkdir()
    write_asset(root, "app.css", "body{color:red}")
    write_asset(root, "a.js", "1")
    write_asset(root, "b.js", "2", mtime=NEW_MTIME)
    write_asset(root, "css/reset.css", "*{margin:0}")
    write_asset(root, "img/logo.png", b"\x89PNG\r\n\x1a\nfake")
    (root / "empty-dir").mkdir()
    return root


@pytest.fixture()
def config(static_dir: Path) -> StaticConfig:
    return StaticConfig(file_root=static_dir)


@pytest.fixture()
def uncached_config(static_dir: Path) -> StaticConfig:
    return StaticConfig(file_root=static_dir, cache_enabled=False)


@pytest.fixture()
def assets(config: StaticConfig) -> StaticAssets:
    return StaticAssets.from_config(config)
