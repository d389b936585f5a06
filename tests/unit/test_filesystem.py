"""Tests for file roots and digest helpers."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from statichash.digest import build_url, content_digest, join_basenames
from statichash.filesystem import LocalFileSystem, clean_name


class TestCleanName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("app.css", "app.css"),
            ("/css/app.css", "css/app.css"),
            ("css/../app.css", "app.css"),
            ("../../etc/passwd", "etc/passwd"),
            ("css//app.css", "css/app.css"),
        ],
    )
    def test_clean(self, name: str, expected: str) -> None:
        assert clean_name(name) == expected


class TestLocalFileSystem:
    def test_read(self, static_dir: Path) -> None:
        asset = LocalFileSystem(static_dir).read("css/reset.css")

        assert asset.name == "css/reset.css"
        assert asset.content == b"*{margin:0}"
        assert asset.mod_time == datetime.fromtimestamp(1_600_000_000, tz=UTC)

    def test_path_stays_inside_root(self, static_dir: Path) -> None:
        fs = LocalFileSystem(static_dir)
        assert fs.path_for("../../outside.txt") == static_dir / "outside.txt"

    def test_missing(self, static_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            LocalFileSystem(static_dir).read("nope.css")

    def test_directory(self, static_dir: Path) -> None:
        with pytest.raises(IsADirectoryError):
            LocalFileSystem(static_dir).read("empty-dir")

    def test_nul_byte(self, static_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            LocalFileSystem(static_dir).read("app\x00.css")


class TestDigestHelpers:
    def test_join_basenames(self) -> None:
        assert join_basenames(["css/reset.css", "app.css", "js/lib/"]) == "reset.css-app.css-lib"

    def test_build_url(self) -> None:
        assert build_url("/static/", "0123456789", ["a.js", "b.js"]) == (
            "/static/0123456789/a.js-b.js"
        )

    def test_content_digest_length(self) -> None:
        digest = content_digest([b"1", b"2"])
        assert len(digest) == 10
        assert digest == content_digest([b"12"])
