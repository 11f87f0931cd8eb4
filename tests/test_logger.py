"""Tests for structured logging setup."""

import io
import json
import logging

import pytest
import structlog

from logger import HANDLER_NAME, setup_logging


@pytest.fixture
def stream():
    buf = io.StringIO()
    yield buf
    root = logging.getLogger()
    for h in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(h)
    structlog.reset_defaults()


def _lines(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines() if line.strip()]


def test_structlog_events_are_json_with_service(stream):
    setup_logging("skillswap-test", "info", stream=stream)

    structlog.get_logger("store").info("completion confirmed", session_id="s1", outcome="confirmed")

    [entry] = _lines(stream)
    assert entry["event"] == "completion confirmed"
    assert entry["session_id"] == "s1"
    assert entry["service"] == "skillswap-test"
    assert entry["level"] == "info"
    assert "timestamp" in entry


def test_stdlib_records_share_the_format(stream):
    setup_logging("skillswap-test", "info", stream=stream)

    logging.getLogger("uvicorn.error").warning("server shutting down")

    [entry] = _lines(stream)
    assert entry["event"] == "server shutting down"
    assert entry["logger"] == "uvicorn.error"
    assert entry["service"] == "skillswap-test"


def test_level_filters_lower_events(stream):
    setup_logging("skillswap-test", "warning", stream=stream)
    structlog.get_logger("tagging").info("skill tagged")
    assert _lines(stream) == []


def test_setup_twice_keeps_one_handler(stream):
    setup_logging(stream=stream)
    setup_logging(stream=stream)
    names = [h.get_name() for h in logging.getLogger().handlers]
    assert names.count(HANDLER_NAME) == 1
