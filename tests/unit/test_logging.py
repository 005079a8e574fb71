"""
Tests for structured logging setup.
"""

import json

import pytest
import structlog

from climate_bridge.utils.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_logs_are_json_lines(monkeypatch, capsys):
    """Test events render as one JSON object per line."""
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    setup_logging()

    get_logger("climate_bridge.test").info("bridge_ready", entity_id="climate.living_room")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "bridge_ready"
    assert record["entity_id"] == "climate.living_room"
    assert record["level"] == "info"
    assert "timestamp" in record


def test_log_level_filters_events(monkeypatch, capsys):
    """Test events below LOG_LEVEL are dropped."""
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    setup_logging()

    log = get_logger()
    log.info("poll_ok")
    log.warning("poll_failed", consecutive_failures=3)

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["event"] == "poll_failed"
