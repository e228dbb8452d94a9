"""Tests for structured logging and run correlation."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from jdiffreport.config.models import LoggingConfig, LogOutputConfig
from jdiffreport.core.logging import (
    _add_run_id,
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    yield
    for handler in logging.getLogger().handlers:
        handler.close()
    configure_logging()


class TestRunId:
    """Run correlation ID tests."""

    def test_given_no_id_when_set_then_generates_twelve_hex_chars(self) -> None:
        # When
        rid = set_run_id()

        # Then
        assert len(rid) == 12
        int(rid, 16)
        assert get_run_id() == rid

    def test_given_explicit_id_when_set_then_used(self) -> None:
        assert set_run_id("abc123") == "abc123"
        assert get_run_id() == "abc123"

    def test_given_id_when_cleared_then_none(self) -> None:
        set_run_id()
        clear_run_id()
        assert get_run_id() is None

    def test_processor_adds_run_id_only_when_set(self) -> None:
        assert _add_run_id(None, "info", {"event": "x"}) == {"event": "x"}

        set_run_id("feedface0001")
        assert _add_run_id(None, "info", {"event": "x"}) == {
            "event": "x",
            "run_id": "feedface0001",
        }


class TestConfigureLogging:
    """configure_logging() tests."""

    @pytest.mark.usefixtures("restore_logging")
    def test_given_level_when_configured_then_root_level_set(self) -> None:
        configure_logging(level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    @pytest.mark.usefixtures("restore_logging")
    def test_given_httpx_when_configured_then_quieted(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING

    @pytest.mark.usefixtures("restore_logging")
    def test_given_json_file_output_when_logging_then_records_written(
        self, tmp_path: Path
    ) -> None:
        """JSON file output carries event, context and run id."""
        # Given
        log_file = tmp_path / "logs" / "jdiff.jsonl"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_run_id("0123456789ab")

        # When
        structlog.get_logger("test").info("version_resolved", version="1.0")
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Then
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "version_resolved"
        assert record["version"] == "1.0"
        assert record["run_id"] == "0123456789ab"
        assert record["level"] == "info"

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValueError, match="absolute"):
            LogOutputConfig(destination="relative/log.txt")


class TestGetLogger:
    def test_binds_logger_name(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("scm").info("checkout_started")

        assert logs[0]["logger"] == "scm"
        assert logs[0]["event"] == "checkout_started"
