"""
Error types for static asset resolution and configuration.

Request-time problems (malformed paths, unknown digests) are not errors:
the dispatcher answers them with a uniform 404 and never raises.
"""


class StaticAssetError(Exception):
    """Base exception for all statichash errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(StaticAssetError):
    """
    Raised when a StaticConfig cannot be built.

    Examples:
    - Missing STATIC_DIR environment variable
    - Negative max-age
    - Unparseable boolean or integer setting
    """

    pass


class AssetResolutionError(StaticAssetError):
    """
    Raised when a logical asset name cannot be fingerprinted.

    The underlying OSError (missing file, directory, permission problem,
    short read) is chained as ``__cause__``. Resolution is all-or-nothing,
    so nothing is cached when this is raised.
    """

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot resolve static asset {name!r}: {reason}")
