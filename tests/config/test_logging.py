"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from pgbootstrap.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("pgbootstrap").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_info(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("pgbootstrap").level == logging.INFO

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("pgbootstrap.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pgbootstrap.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        logging.getLogger("pgbootstrap.services.bootstrap").info("Data directory is initialized")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Data directory is initialized"
        assert parsed["level"] == "info"

    def test_debug_suppressed_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("pgbootstrap.services.validator").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
