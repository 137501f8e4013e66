"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from haccpctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    haccp = logging.getLogger("haccpctl")
    haccp_level = haccp.level
    yield
    root.handlers = original_handlers
    structlog.contextvars.clear_contextvars()
    root.setLevel(original_level)
    haccp.setLevel(haccp_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("haccpctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("haccpctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("haccpctl.test")
        log.warning("signal_unavailable", domain="temperature")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "signal_unavailable"
        assert parsed["domain"] == "temperature"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "haccpctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("haccpctl.infrastructure").debug("Loaded evidence for %d tenant(s)", 2)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Loaded evidence for 2 tenant(s)"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("haccpctl.test").debug("quiet please")
        assert capfd.readouterr().err == ""

    def test_tenant_bound_on_every_event(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True, tenant="kitchen-1")
        structlog.get_logger("haccpctl.test").info("evaluate.complete", score=100)
        logging.getLogger("haccpctl.infrastructure").debug("Opened snooze database")
        lines = capfd.readouterr().err.strip().splitlines()
        assert [json.loads(line)["tenant"] for line in lines] == ["kitchen-1", "kitchen-1"]

    def test_reconfigure_drops_previous_tenant(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_json=True, tenant="kitchen-1")
        configure_logging(log_json=True)
        structlog.get_logger("haccpctl.test").warning("snooze_not_persisted")
        assert "tenant" not in json.loads(capfd.readouterr().err.strip())
