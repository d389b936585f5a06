"""Tests for logging setup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from statichash import AssetResolutionError, Resolver, StaticConfig
from statichash.logging import ROOT_LOGGER, log_with_context, setup_logging


@pytest.fixture()
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger(ROOT_LOGGER)
    saved_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(saved_level)


class TestSetupLogging:
    def test_console_only(self, package_logger: logging.Logger) -> None:
        setup_logging("DEBUG")

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_jsonl_file(self, package_logger: logging.Logger, tmp_path: Path) -> None:
        setup_logging(logging.INFO, log_dir=tmp_path)
        log_with_context(
            logging.getLogger("statichash.test"),
            logging.WARNING,
            "Something happened",
            digest="0123456789",
        )

        lines = (tmp_path / "statichash.log").read_text().splitlines()
        entry = json.loads(lines[-1])
        assert entry["level"] == "WARNING"
        assert entry["message"] == "Something happened"
        assert entry["context"] == {"digest": "0123456789"}
        assert entry["logger"] == "statichash.test"

    def test_resolution_failure_logged(
        self, config: StaticConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="statichash.resolver"):
            with pytest.raises(AssetResolutionError):
                Resolver(config).url("missing.css")

        record = next(r for r in caplog.records if r.name == "statichash.resolver")
        assert record.context["failed"] == "missing.css"  # type: ignore[attr-defined]
