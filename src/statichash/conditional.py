"""
HTTP conditional request and byte range helpers.

Implements the subset of RFC 9110/9111 semantics a static file server
needs: validators (ETag, Last-Modified), the If-* precondition headers and
single byte ranges. Multi-part ranges are not produced; a request for more
than one range receives the full representation.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from http import HTTPStatus

_SAFE_METHODS = frozenset({"GET", "HEAD"})
_DIGITS = re.compile(r"[0-9]+")


class RangeNotSatisfiable(Exception):
    """Raised when a well-formed Range header selects no bytes."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Requested range not satisfiable for {size} bytes")


def http_date(value: datetime) -> str:
    """Format ``value`` as an IMF-fixdate (``Sun, 06 Nov 1994 08:49:37 GMT``)."""
    return format_datetime(value.astimezone(UTC).replace(microsecond=0), usegmt=True)


def parse_http_date(value: str | None) -> datetime | None:
    """Parse an HTTP date header; returns None when absent or invalid."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def make_etag(digest: str) -> str:
    """Strong entity tag for a digest prefix."""
    return f'"{digest}"'


def _truncate(value: datetime) -> datetime:
    return value.astimezone(UTC).replace(microsecond=0)


def _etag_list(header: str) -> list[str]:
    return [tag.strip() for tag in header.split(",") if tag.strip()]


def etag_matches(header: str, etag: str, *, weak: bool) -> bool:
    """
    Check an If-Match / If-None-Match style list against ``etag``.

    Args:
        header: Raw header value (may be ``*``)
        etag: Current entity tag (quoted)
        weak: Use weak comparison (ignore ``W/`` prefixes)
    """
    for tag in _etag_list(header):
        if tag == "*":
            return True
        if weak:
            if tag.removeprefix("W/") == etag.removeprefix("W/"):
                return True
        elif not tag.startswith("W/") and tag == etag:
            return True
    return False


def evaluate_preconditions(
    method: str,
    headers: Mapping[str, str],
    etag: str,
    mod_time: datetime,
) -> HTTPStatus | None:
    """
    Evaluate If-Match, If-Unmodified-Since, If-None-Match and
    If-Modified-Since in RFC 9110 order.

    Returns:
        ``NOT_MODIFIED`` or ``PRECONDITION_FAILED`` when the request should
        short-circuit, otherwise None.
    """
    last_modified = _truncate(mod_time)

    if_match = headers.get("if-match")
    if if_match is not None:
        if not etag_matches(if_match, etag, weak=False):
            return HTTPStatus.PRECONDITION_FAILED
    else:
        since = parse_http_date(headers.get("if-unmodified-since"))
        if since is not None and last_modified > since:
            return HTTPStatus.PRECONDITION_FAILED

    if_none_match = headers.get("if-none-match")
    if if_none_match is not None:
        if etag_matches(if_none_match, etag, weak=True):
            if method in _SAFE_METHODS:
                return HTTPStatus.NOT_MODIFIED
            return HTTPStatus.PRECONDITION_FAILED
        return None

    if method in _SAFE_METHODS:
        since = parse_http_date(headers.get("if-modified-since"))
        if since is not None and last_modified <= since:
            return HTTPStatus.NOT_MODIFIED
    return None


def if_range_allows(headers: Mapping[str, str], etag: str, mod_time: datetime) -> bool:
    """True if a Range header should be honoured given any If-Range validator."""
    value = headers.get("if-range")
    if value is None:
        return True
    value = value.strip()
    if value.startswith('"') or value.startswith("W/"):
        return not value.startswith("W/") and value == etag
    since = parse_http_date(value)
    return since is not None and since == _truncate(mod_time)


def parse_byte_range(value: str | None, size: int) -> tuple[int, int] | None:
    """
    Parse a single ``bytes=`` range against a representation of ``size`` bytes.

    Returns:
        Inclusive ``(start, end)`` offsets, or None when the header is absent,
        malformed or asks for several ranges (serve the full body).

    Raises:
        RangeNotSatisfiable: The range is well-formed but selects no bytes
    """
    if not value:
        return None
    unit, _, spec = value.strip().partition("=")
    if unit.strip().lower() != "bytes" or not spec:
        return None
    if "," in spec:
        return None

    first, sep, last = spec.strip().partition("-")
    if not sep:
        return None
    first, last = first.strip(), last.strip()

    if not first:
        # Suffix range: the final N bytes
        if not _DIGITS.fullmatch(last):
            return None
        length = int(last)
        if length == 0 or size == 0:
            raise RangeNotSatisfiable(size)
        return max(size - length, 0), size - 1

    if not _DIGITS.fullmatch(first) or (last and not _DIGITS.fullmatch(last)):
        return None
    start = int(first)
    end = int(last) if last else size - 1
    if last and end < start:
        return None
    if start >= size:
        raise RangeNotSatisfiable(size)
    return start, min(end, size - 1)
