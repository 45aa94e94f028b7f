"""
Tests for structured logging.
"""

import json
import logging
from shared.logging import (
    JSONFormatter,
    ROOT_LOGGER_NAME,
    get_logger,
    mint_id_context,
    mint_context,
    set_mint_id
)


def _last_json(caplog):
    return json.loads(JSONFormatter().format(caplog.records[-1]))


def test_get_logger_returns_child_of_app_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == f"{ROOT_LOGGER_NAME}.test_module"
    assert get_logger(f"{ROOT_LOGGER_NAME}.test_module") is logger


def test_handlers_configured_once():
    """Handlers live on the app logger only and are not duplicated."""
    get_logger("first")
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handler_count = len(root.handlers)

    child = get_logger("second")

    assert handler_count >= 1
    assert len(root.handlers) == handler_count
    assert child.handlers == []


def test_logger_outputs_json_format(caplog):
    logger = get_logger("test_module")

    with caplog.at_level(logging.INFO):
        logger.info("Test message", extra={"key": "value", "count": 3, "path": object()})

    log_data = _last_json(caplog)
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == f"{ROOT_LOGGER_NAME}.test_module"
    assert log_data["message"] == "Test message"
    assert log_data["key"] == "value"
    assert log_data["count"] == 3
    assert isinstance(log_data["path"], str)


def test_logger_includes_mint_id(caplog):
    logger = get_logger("test_module")

    set_mint_id("1700000000000")
    try:
        assert mint_id_context.get() == "1700000000000"
        with caplog.at_level(logging.INFO):
            logger.info("Test message")
        assert _last_json(caplog)["mint_id"] == "1700000000000"
    finally:
        set_mint_id(None)


def test_logger_excludes_mint_id_when_not_set(caplog):
    logger = get_logger("test_module")

    set_mint_id(None)
    with caplog.at_level(logging.INFO):
        logger.info("Test message")

    assert "mint_id" not in _last_json(caplog)


def test_mint_context_restores_previous_value():
    set_mint_id("outer")
    try:
        with mint_context("inner"):
            assert mint_id_context.get() == "inner"
        assert mint_id_context.get() == "outer"
    finally:
        set_mint_id(None)


def test_logger_formats_exceptions(caplog):
    logger = get_logger("test_module")

    with caplog.at_level(logging.INFO):
        try:
            raise RuntimeError("ffmpeg exploded")
        except RuntimeError:
            logger.exception("Failure")

    assert "ffmpeg exploded" in _last_json(caplog)["exception"]


def test_none_mint_id_extra_keeps_context_value(caplog):
    logger = get_logger("test_module")

    with mint_context("1700000000000"):
        with caplog.at_level(logging.INFO):
            logger.info("Request failed", extra={"mint_id": None, "status_code": 404})
        log_data = _last_json(caplog)

    assert log_data["mint_id"] == "1700000000000"
    assert log_data["status_code"] == 404


def test_explicit_mint_id_extra_wins(caplog):
    logger = get_logger("test_module")

    with mint_context("outer"):
        with caplog.at_level(logging.INFO):
            logger.info("Composing", extra={"mint_id": "1700000000001"})
        log_data = _last_json(caplog)

    assert log_data["mint_id"] == "1700000000001"
