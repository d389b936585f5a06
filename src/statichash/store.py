"""
In-memory table of resolved assets, keyed by digest prefix.

Entries are written by the resolver (once per distinct file combination,
typically while rendering the first page) and read by the dispatcher on
every static request. A single lock guards the map; the write rate is far
too low to justify anything finer.
"""

from __future__ import annotations

import threading
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """Resolved asset group: concatenated content plus its newest mtime."""

    model_config = ConfigDict(frozen=True)

    digest: str = Field(description="Truncated hex digest of the content")
    names: tuple[str, ...] = Field(description="Logical file names, in hash order")
    content: bytes | None = Field(
        default=None,
        description="Concatenated content; None when in-memory caching is disabled",
    )
    mod_time: datetime = Field(description="Latest modification time among the files")

    @property
    def is_cached(self) -> bool:
        return self.content is not None


class AssetStore:
    """Thread-safe map of digest prefix to CacheEntry."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, digest: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(digest)

    def put(self, entry: CacheEntry) -> None:
        """Store ``entry``, replacing any entry with the same digest."""
        with self._lock:
            self._entries[entry.digest] = entry

    def digests(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, digest: object) -> bool:
        with self._lock:
            return digest in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
