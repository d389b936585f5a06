"""
Fingerprinting resolver.

Reads one or more logical files from the file root, hashes their
concatenated content and returns a URL of the form::

    /static/<10 hex chars>/<basename>[-<basename>...]

The resolved group is recorded in the AssetStore under the digest prefix so
the dispatcher can serve it later. Order matters: ``["a.js", "b.js"]`` and
``["b.js", "a.js"]`` produce different digests and different bytes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from .config import StaticConfig
from .digest import build_url, digest_prefix, new_hash
from .errors import AssetResolutionError
from .filesystem import FileSystem, LocalFileSystem
from .logging import log_with_context
from .store import AssetStore, CacheEntry

logger = logging.getLogger(__name__)

_EPOCH = datetime.fromtimestamp(0, tz=UTC)


class Resolver:
    """
    Compute content-addressed URLs for static assets.

    Args:
        config: Static configuration (file root, cache toggle, prefix)
        store: Shared AssetStore; a private one is created if omitted
        file_system: File root backend; defaults to ``config.file_root``
    """

    def __init__(
        self,
        config: StaticConfig,
        store: AssetStore | None = None,
        file_system: FileSystem | None = None,
    ):
        self.config = config
        self.store = store if store is not None else AssetStore()
        self.file_system = file_system or LocalFileSystem(config.file_root)

    def read_assets(self, names: Sequence[str]) -> CacheEntry:
        """
        Read and hash ``names`` in order without touching the store.

        Raises:
            ValueError: ``names`` is empty
            AssetResolutionError: Any file cannot be opened or read
        """
        if isinstance(names, str):
            raise TypeError("names must be a sequence of asset names, not a string")
        if not names:
            raise ValueError("At least one asset name is required")

        h = new_hash()
        chunks: list[bytes] = []
        mod_time = _EPOCH
        for name in names:
            try:
                asset = self.file_system.read(name)
            except OSError as e:
                raise AssetResolutionError(name, e.strerror or str(e)) from e
            if asset.mod_time > mod_time:
                mod_time = asset.mod_time
            chunks.append(asset.content)
            h.update(asset.content)

        return CacheEntry(
            digest=digest_prefix(h),
            names=tuple(names),
            content=b"".join(chunks),
            mod_time=mod_time,
        )

    def resolve(self, names: Sequence[str]) -> str:
        """
        Return the combined fingerprinted URL for ``names``.

        Records the group in the store (without content when caching is
        disabled). Nothing is recorded if any file fails.
        """
        try:
            entry = self.read_assets(names)
        except AssetResolutionError as e:
            log_with_context(
                logger,
                logging.WARNING,
                "Static asset resolution failed",
                names=list(names),
                failed=e.name,
                reason=e.reason,
            )
            raise

        if not self.config.cache_enabled:
            entry = entry.model_copy(update={"content": None})
        self.store.put(entry)

        url = build_url(self.config.prefix, entry.digest, names)
        logger.debug("Resolved %s -> %s", ", ".join(names), url)
        return url

    def combined_url(self, names: Sequence[str]) -> str:
        """Alias of ``resolve`` for multi-file groups."""
        return self.resolve(names)

    def url(self, name: str) -> str:
        """Return the fingerprinted URL for a single file."""
        return self.resolve([name])
