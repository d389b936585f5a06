"""Fingerprint and URL helpers shared by the resolver and dispatcher."""

from __future__ import annotations

import hashlib
import posixpath
from collections.abc import Iterable, Sequence
from typing import Any

# Hex characters of the MD5 digest kept in URLs
DIGEST_LENGTH = 10


def new_hash() -> Any:
    """Return a fresh hasher for asset content. Used for cache busting only."""
    return hashlib.md5(usedforsecurity=False)


def digest_prefix(hasher: Any) -> str:
    """Truncate a hasher's hex digest to the URL digest length."""
    return str(hasher.hexdigest())[:DIGEST_LENGTH]


def content_digest(chunks: Iterable[bytes]) -> str:
    """Digest prefix of the concatenation of ``chunks``."""
    h = new_hash()
    for chunk in chunks:
        h.update(chunk)
    return digest_prefix(h)


def basename(name: str) -> str:
    """Last path component of a logical name, ignoring trailing slashes."""
    stripped = name.rstrip("/")
    if not stripped:
        return "/" if name else "."
    return posixpath.basename(stripped)


def join_basenames(names: Sequence[str]) -> str:
    """Hyphen-join the base names of ``names`` in order."""
    return "-".join(basename(name) for name in names)


def build_url(prefix: str, digest: str, names: Sequence[str]) -> str:
    """Build ``<prefix><digest>/<joined-basenames>``."""
    return f"{prefix.rstrip('/')}/{digest}/{join_basenames(names)}"
