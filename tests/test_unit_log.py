"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from loadtarget.log import NAMESPACES, JsonFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def clean_loggers():
    yield
    for name in NAMESPACES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_json_formatter_renders_uvicorn_access_args():
    record = logging.LogRecord(
        "uvicorn.access", logging.INFO, __file__, 1,
        '%s - "%s %s HTTP/%s" %d', ("127.0.0.1:5000", "GET", "/", "1.1", 200), None,
    )
    entry = json.loads(JsonFormatter().format(record))
    assert entry["logger"] == "uvicorn.access"
    assert entry["level"] == "INFO"
    assert entry["message"] == '127.0.0.1:5000 - "GET / HTTP/1.1" 200'


def test_server_loggers_share_the_format():
    setup_logging(json_format=True)
    for name in NAMESPACES:
        (handler,) = logging.getLogger(name).handlers
        assert isinstance(handler.formatter, JsonFormatter)


def test_setup_is_idempotent_and_reapplies_settings():
    setup_logging(logging.INFO, json_format=True)
    logger = setup_logging(logging.DEBUG, json_format=False)

    assert logger.name == "loadtarget"
    (handler,) = logger.handlers
    assert handler.level == logging.DEBUG
    assert not isinstance(handler.formatter, JsonFormatter)
    assert len(logging.getLogger("uvicorn").handlers) == 1


def test_get_logger_namespace():
    assert get_logger("server").name == "loadtarget.server"
