"""
Request dispatcher for fingerprinted static URLs.

Parses ``<prefix><digest>/<names>``, looks the digest up in the AssetStore
and answers with the stored bytes and a long-lived Cache-Control header.
Malformed paths and unknown digests get one uniform, uncacheable 404.

Lookup policy:
- cache enabled: only digests recorded with content are served; anything
  else is 404.
- cache disabled: files are re-read per request, either from the names
  recorded for the digest or from the trailing URL segments. The bytes are
  served only if they still hash to the requested digest.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence
from http import HTTPStatus

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from .conditional import (
    RangeNotSatisfiable,
    evaluate_preconditions,
    http_date,
    if_range_allows,
    make_etag,
    parse_byte_range,
)
from .config import StaticConfig
from .errors import AssetResolutionError
from .resolver import Resolver
from .store import AssetStore, CacheEntry

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "static resource not found!"
_DEFAULT_MEDIA_TYPE = "application/octet-stream"


def not_found() -> Response:
    """Uniform 404 that intermediaries must not cache."""
    return PlainTextResponse(
        NOT_FOUND_BODY,
        status_code=HTTPStatus.NOT_FOUND,
        headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
    )


def guess_media_type(path: str) -> str:
    """Content type from the cosmetic trailing segment of a static URL."""
    media_type, _ = mimetypes.guess_type(path)
    return media_type or _DEFAULT_MEDIA_TYPE


class Dispatcher:
    """
    Serve static assets previously fingerprinted by a Resolver.

    Args:
        config: Static configuration (prefix, max-age, cache toggle)
        store: AssetStore shared with the resolver; only ever read here
        resolver: Used to re-read files when caching is disabled
    """

    def __init__(
        self,
        config: StaticConfig,
        store: AssetStore,
        resolver: Resolver | None = None,
    ):
        self.config = config
        self.store = store
        self.resolver = resolver or Resolver(config, store)

    def parse_path(self, path: str) -> tuple[str, list[str]] | None:
        """Split a request path into ``(digest, trailing segments)``."""
        if not path.startswith(self.config.prefix):
            return None
        segments = path[len(self.config.prefix) :].split("/")
        digest = segments[0]
        if not digest:
            return None
        return digest, segments[1:]

    def lookup(self, digest: str, rest: Sequence[str]) -> CacheEntry | None:
        """Find servable content for ``digest``; None means not found."""
        entry = self.store.get(digest)
        if entry is not None and entry.is_cached:
            return entry
        if self.config.cache_enabled:
            return None
        return self._reload(digest, entry, rest)

    def _reload(
        self, digest: str, entry: CacheEntry | None, rest: Sequence[str]
    ) -> CacheEntry | None:
        if entry is not None:
            names: Sequence[str] = entry.names
        else:
            name = "/".join(segment for segment in rest if segment)
            if not name:
                return None
            names = [name]

        try:
            fresh = self.resolver.read_assets(names)
        except AssetResolutionError as e:
            logger.debug("On-demand static read failed for %s: %s", digest, e)
            return None

        if fresh.digest != digest:
            logger.info(
                "Static content for %s changed on disk (now %s); not serving",
                digest,
                fresh.digest,
            )
            return None
        return fresh

    def handle(self, request: Request) -> Response:
        """Answer one static asset request."""
        path = request.url.path
        parsed = self.parse_path(path)
        if parsed is None:
            logger.debug("Malformed static path %s", path)
            return not_found()

        digest, rest = parsed
        entry = self.lookup(digest, rest)
        if entry is None:
            logger.debug("Unknown static digest %s", digest)
            return not_found()
        return self.serve(request, entry, path)

    def serve(self, request: Request, entry: CacheEntry, path: str) -> Response:
        """Stream ``entry`` honouring conditional and range headers."""
        content = entry.content or b""
        size = len(content)
        method = request.method.upper()
        etag = make_etag(entry.digest)
        headers = {
            "Cache-Control": self.config.cache_control,
            "Last-Modified": http_date(entry.mod_time),
            "ETag": etag,
            "Accept-Ranges": "bytes",
        }

        status = evaluate_preconditions(method, request.headers, etag, entry.mod_time)
        if status == HTTPStatus.NOT_MODIFIED:
            return Response(status_code=status, headers=headers)
        if status is not None:
            return Response(status_code=status)

        status = HTTPStatus.OK
        body = content
        if method in ("GET", "HEAD") and if_range_allows(request.headers, etag, entry.mod_time):
            try:
                byte_range = parse_byte_range(request.headers.get("range"), size)
            except RangeNotSatisfiable:
                return Response(
                    status_code=HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE,
                    headers={"Content-Range": f"bytes */{size}"},
                )
            if byte_range is not None:
                start, end = byte_range
                body = content[start : end + 1]
                status = HTTPStatus.PARTIAL_CONTENT
                headers["Content-Range"] = f"bytes {start}-{end}/{size}"

        headers["Content-Length"] = str(len(body))
        if method == "HEAD":
            body = b""
        return Response(
            content=body,
            status_code=status,
            headers=headers,
            media_type=guess_media_type(path),
        )
