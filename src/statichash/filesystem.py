"""
File root abstraction for static assets.

Logical asset names are slash separated and always relative to one
configured root. The local backend cleans each name as an absolute path
before joining it to the root, so ``../`` segments cannot escape it.
"""

from __future__ import annotations

import os
import posixpath
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class AssetFile(BaseModel):
    """Content and modification time of one file read from a file root."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Logical name the file was requested under")
    content: bytes = Field(description="Full file content")
    mod_time: datetime = Field(description="Last modification time (UTC)")


class FileSystem(ABC):
    """Abstract read-only file root."""

    @abstractmethod
    def read(self, name: str) -> AssetFile:
        """
        Read a file in full.

        Args:
            name: Logical, slash-separated asset name

        Returns:
            AssetFile with content and modification time

        Raises:
            OSError: The file is missing, a directory or unreadable
        """
        ...


def clean_name(name: str) -> str:
    """
    Clean a logical name the way an HTTP directory would.

    ``"css/../app.css"`` becomes ``"app.css"`` and ``"../../etc/passwd"``
    becomes ``"etc/passwd"``.
    """
    return posixpath.normpath("/" + name).lstrip("/")


class LocalFileSystem(FileSystem):
    """
    File root backed by a local directory.

    Args:
        root: Directory all logical names are resolved against
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"LocalFileSystem({str(self.root)!r})"

    def path_for(self, name: str) -> Path:
        """Map a logical name onto a filesystem path inside the root."""
        if "\x00" in name or (os.sep != "/" and os.sep in name):
            raise FileNotFoundError(f"Invalid character in file path: {name!r}")
        cleaned = clean_name(name)
        if not cleaned or cleaned == ".":
            return self.root
        return self.root.joinpath(*cleaned.split("/"))

    def read(self, name: str) -> AssetFile:
        path = self.path_for(name)
        with path.open("rb") as f:
            stat = os.fstat(f.fileno())
            content = f.read()
        return AssetFile(
            name=name,
            content=content,
            mod_time=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        )
