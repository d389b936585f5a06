"""Tests for HTTP validator, precondition and range helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from http import HTTPStatus

import pytest

from statichash.conditional import (
    RangeNotSatisfiable,
    etag_matches,
    evaluate_preconditions,
    http_date,
    if_range_allows,
    parse_byte_range,
    parse_http_date,
)

MOD_TIME = datetime(2020, 9, 13, 12, 26, 40, 500000, tzinfo=UTC)
ETAG = '"abcdef0123"'


class TestHttpDates:
    def test_format(self) -> None:
        assert http_date(MOD_TIME) == "Sun, 13 Sep 2020 12:26:40 GMT"

    def test_parse(self) -> None:
        assert parse_http_date("Sun, 13 Sep 2020 12:26:40 GMT") == MOD_TIME.replace(
            microsecond=0
        )

    @pytest.mark.parametrize("value", [None, "", "yesterday"])
    def test_parse_invalid(self, value: str | None) -> None:
        assert parse_http_date(value) is None


class TestEtagMatching:
    def test_exact(self) -> None:
        assert etag_matches(ETAG, ETAG, weak=False)

    def test_list_and_wildcard(self) -> None:
        assert etag_matches(f'"other", {ETAG}', ETAG, weak=False)
        assert etag_matches("*", ETAG, weak=False)

    def test_weak_comparison(self) -> None:
        assert etag_matches(f"W/{ETAG}", ETAG, weak=True)
        assert not etag_matches(f"W/{ETAG}", ETAG, weak=False)


class TestPreconditions:
    def _evaluate(self, headers: dict[str, str], method: str = "GET") -> HTTPStatus | None:
        return evaluate_preconditions(method, headers, ETAG, MOD_TIME)

    def test_no_headers(self) -> None:
        assert self._evaluate({}) is None

    def test_not_modified_since(self) -> None:
        assert (
            self._evaluate({"if-modified-since": "Sun, 13 Sep 2020 12:26:40 GMT"})
            == HTTPStatus.NOT_MODIFIED
        )

    def test_modified_since(self) -> None:
        assert self._evaluate({"if-modified-since": "Sat, 12 Sep 2020 00:00:00 GMT"}) is None

    def test_if_none_match_wins_over_date(self) -> None:
        headers = {
            "if-none-match": '"something-else"',
            "if-modified-since": http_date(MOD_TIME + timedelta(days=1)),
        }
        assert self._evaluate(headers) is None

    def test_if_none_match_on_unsafe_method(self) -> None:
        assert (
            self._evaluate({"if-none-match": ETAG}, method="POST")
            == HTTPStatus.PRECONDITION_FAILED
        )

    def test_if_match_mismatch(self) -> None:
        assert self._evaluate({"if-match": '"nope"'}) == HTTPStatus.PRECONDITION_FAILED

    def test_if_unmodified_since(self) -> None:
        assert (
            self._evaluate({"if-unmodified-since": "Sat, 12 Sep 2020 00:00:00 GMT"})
            == HTTPStatus.PRECONDITION_FAILED
        )
        assert self._evaluate({"if-unmodified-since": http_date(MOD_TIME)}) is None


class TestIfRange:
    def test_absent(self) -> None:
        assert if_range_allows({}, ETAG, MOD_TIME)

    def test_matching_etag(self) -> None:
        assert if_range_allows({"if-range": ETAG}, ETAG, MOD_TIME)
        assert not if_range_allows({"if-range": f"W/{ETAG}"}, ETAG, MOD_TIME)

    def test_matching_date(self) -> None:
        assert if_range_allows({"if-range": http_date(MOD_TIME)}, ETAG, MOD_TIME)
        assert not if_range_allows(
            {"if-range": "Sat, 12 Sep 2020 00:00:00 GMT"}, ETAG, MOD_TIME
        )


class TestByteRange:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("bytes=0-3", (0, 3)),
            ("bytes=5-", (5, 9)),
            ("bytes=-3", (7, 9)),
            ("bytes=-50", (0, 9)),
            ("bytes=8-100", (8, 9)),
        ],
    )
    def test_satisfiable(self, header: str, expected: tuple[int, int]) -> None:
        assert parse_byte_range(header, 10) == expected

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "items=0-3",
            "bytes=abc",
            "bytes=5-2",
            "bytes=0-1,4-5",
            "bytes=3",
            "bytes=0-\u00b2",
            "bytes=\u00b2-5",
            "bytes=-\u00b2",
            "bytes=\u0661-3",
        ],
    )
    def test_ignored(self, header: str | None) -> None:
        assert parse_byte_range(header, 10) is None

    @pytest.mark.parametrize("header", ["bytes=10-", "bytes=-0"])
    def test_unsatisfiable(self, header: str) -> None:
        with pytest.raises(RangeNotSatisfiable):
            parse_byte_range(header, 10)

    def test_empty_representation(self) -> None:
        with pytest.raises(RangeNotSatisfiable):
            parse_byte_range("bytes=0-", 0)
