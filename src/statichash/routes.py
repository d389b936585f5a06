"""
FastAPI wiring for fingerprinted static assets.

Example usage:
    >>> from statichash import StaticConfig, create_static_app
    >>>
    >>> app = create_static_app(StaticConfig(file_root="public"))
    >>> assets = app.state.static_assets
    >>> assets.url("css/app.css")  # '/static/<10 hex chars>/app.css'
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import StaticConfig
from .dispatcher import Dispatcher, not_found
from .filesystem import FileSystem
from .resolver import Resolver
from .store import AssetStore

logger = logging.getLogger(__name__)


@dataclass
class StaticAssets:
    """Store, resolver and dispatcher sharing one configuration."""

    config: StaticConfig
    store: AssetStore
    resolver: Resolver
    dispatcher: Dispatcher

    @classmethod
    def from_config(
        cls,
        config: StaticConfig,
        *,
        store: AssetStore | None = None,
        file_system: FileSystem | None = None,
    ) -> StaticAssets:
        store = store if store is not None else AssetStore()
        resolver = Resolver(config, store, file_system)
        dispatcher = Dispatcher(config, store, resolver)
        return cls(config=config, store=store, resolver=resolver, dispatcher=dispatcher)

    def preload(self) -> dict[str, str]:
        """
        Resolve every file under the file root on its own.

        Returns:
            Mapping of logical name to fingerprinted URL
        """
        root = self.config.file_root
        urls: dict[str, str] = {}
        for path in sorted(root.rglob("*")):
            if path.is_file():
                name = path.relative_to(root).as_posix()
                urls[name] = self.resolver.url(name)
        logger.info("Preloaded %d static assets from %s", len(urls), root)
        return urls

    def url(self, name: str) -> str:
        return self.resolver.url(name)

    def combined_url(self, names: Sequence[str]) -> str:
        return self.resolver.resolve(names)


def create_static_routes(app: FastAPI, assets: StaticAssets) -> None:
    """
    Add the static asset route to a FastAPI app.

    Routes:
        GET/HEAD <prefix>{path} - Serve a fingerprinted asset

    Args:
        app: FastAPI application
        assets: StaticAssets bundle whose dispatcher answers the route
    """
    dispatcher = assets.dispatcher

    @app.api_route(
        f"{assets.config.prefix}{{path:path}}",
        methods=["GET", "HEAD"],
        include_in_schema=False,
    )
    def serve_static(path: str, request: Request) -> Response:
        """Serve a fingerprinted static asset."""
        return dispatcher.handle(request)

    logger.info(
        "Static assets under %s served from %s (cache %s, max-age %ss)",
        assets.config.prefix,
        assets.config.file_root,
        "on" if assets.config.cache_enabled else "off",
        assets.config.max_age,
    )


def create_static_app(
    config: StaticConfig,
    *,
    assets: StaticAssets | None = None,
) -> FastAPI:
    """
    Create a FastAPI app that serves the static prefix.

    The StaticAssets bundle is available as ``app.state.static_assets`` so
    page handlers can resolve URLs against the same store.
    """
    assets = assets or StaticAssets.from_config(config)
    app = FastAPI(
        title="statichash",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.static_assets = assets
    create_static_routes(app, assets)
    register_not_found_handler(app)
    return app


def register_not_found_handler(app: FastAPI) -> None:
    """Answer unmatched paths with the same uncacheable 404 as the dispatcher."""

    @app.exception_handler(StarletteHTTPException)
    async def static_not_found_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if exc.status_code == 404:
            return not_found()
        return await http_exception_handler(request, exc)
