"""
Configuration for static asset serving.

Groups the file root, cache lifetime and cache toggle into one object that
is passed explicitly to the resolver and dispatcher.

Environment variables (see ``StaticConfig.from_env``):
    STATIC_DIR      - base directory for asset lookup (required)
    STATIC_MAX_AGE  - Cache-Control max-age in seconds (default: ~10 years)
    STATIC_CACHE    - keep resolved content in memory (default: true)
    STATIC_PREFIX   - URL prefix (default: /static/)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError

STATIC_PATH = "/static/"

# 87658 hours, roughly ten years
DEFAULT_MAX_AGE = 87658 * 3600

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def normalize_prefix(prefix: str) -> str:
    """Return ``prefix`` with exactly one leading and one trailing slash."""
    stripped = prefix.strip().strip("/")
    if not stripped:
        raise ConfigurationError("Static URL prefix must not be the site root")
    return f"/{stripped}/"


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass
class StaticConfig:
    """
    Configuration for static asset resolution and serving.

    Attributes:
        file_root: Base directory every logical asset name is resolved against
        max_age: Seconds used in ``Cache-Control: public, max-age=N``
        cache_enabled: Keep resolved content in memory and serve from it.
            When False, content is re-read from ``file_root`` per request.
        prefix: URL prefix the dispatcher is mounted under
    """

    file_root: Path
    max_age: int = DEFAULT_MAX_AGE
    cache_enabled: bool = True
    prefix: str = field(default=STATIC_PATH)

    def __post_init__(self) -> None:
        self.file_root = Path(self.file_root)
        if self.max_age < 0:
            raise ConfigurationError(f"max_age must not be negative, got {self.max_age}")
        self.prefix = normalize_prefix(self.prefix)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StaticConfig:
        """Build a config from ``STATIC_*`` environment variables."""
        env = os.environ if environ is None else environ

        file_root = env.get("STATIC_DIR", "").strip()
        if not file_root:
            raise ConfigurationError("STATIC_DIR must be set to the static asset directory")

        max_age = DEFAULT_MAX_AGE
        raw_max_age = env.get("STATIC_MAX_AGE", "").strip()
        if raw_max_age:
            try:
                max_age = int(raw_max_age)
            except ValueError:
                raise ConfigurationError(
                    f"STATIC_MAX_AGE must be an integer number of seconds, got {raw_max_age!r}"
                )

        cache_enabled = True
        raw_cache = env.get("STATIC_CACHE", "").strip()
        if raw_cache:
            cache_enabled = _parse_bool("STATIC_CACHE", raw_cache)

        return cls(
            file_root=Path(file_root).expanduser(),
            max_age=max_age,
            cache_enabled=cache_enabled,
            prefix=env.get("STATIC_PREFIX", STATIC_PATH) or STATIC_PATH,
        )

    @property
    def cache_control(self) -> str:
        """Cache-Control header value for successful responses."""
        return f"public, max-age={self.max_age}"
