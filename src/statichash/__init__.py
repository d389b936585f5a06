"""
statichash - content-addressed static asset URLs.

This package provides:
- Resolver: fingerprint one or more files into ``/static/<digest>/<names>``
- Dispatcher: serve those URLs with long-lived Cache-Control headers
- Markup helpers and Jinja2 globals that embed fingerprinted URLs
- FastAPI wiring (``create_static_app`` / ``create_static_routes``)
"""

from statichash._version import get_version as _get_version

__version__ = _get_version()

from statichash.config import DEFAULT_MAX_AGE, STATIC_PATH, StaticConfig
from statichash.digest import DIGEST_LENGTH
from statichash.dispatcher import Dispatcher
from statichash.errors import AssetResolutionError, ConfigurationError, StaticAssetError
from statichash.filesystem import AssetFile, FileSystem, LocalFileSystem
from statichash.markup import Img, LinkStyle, Script
from statichash.resolver import Resolver
from statichash.routes import StaticAssets, create_static_app, create_static_routes
from statichash.store import AssetStore, CacheEntry
from statichash.templating import register_template_globals

__all__ = [
    "__version__",
    # Configuration
    "StaticConfig",
    "DEFAULT_MAX_AGE",
    "STATIC_PATH",
    "DIGEST_LENGTH",
    # Core
    "AssetStore",
    "CacheEntry",
    "Resolver",
    "Dispatcher",
    "StaticAssets",
    # File roots
    "FileSystem",
    "LocalFileSystem",
    "AssetFile",
    # Errors
    "StaticAssetError",
    "ConfigurationError",
    "AssetResolutionError",
    # Hosting and markup
    "create_static_app",
    "create_static_routes",
    "LinkStyle",
    "Script",
    "Img",
    "register_template_globals",
]
