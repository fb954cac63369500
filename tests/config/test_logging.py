"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from chainvertex.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("chainvertex").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("chainvertex").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("chainvertex.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "chainvertex.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_routed_through_structlog(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("chainvertex.audit").info("vertex_created id=%d", 3)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "vertex_created id=3"
        assert parsed["logger"] == "chainvertex.audit"
        assert parsed["level"] == "info"

    def test_debug_suppressed_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("chainvertex.audit").info("hidden")
        assert capfd.readouterr().err == ""

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(verbose=False, log_json=False)
        configure_logging(verbose=False, log_json=True)
        assert len(logging.getLogger().handlers) == 1
