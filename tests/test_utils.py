"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

import curly
from curly.utils import setup_logging


def test_setup_logging_default(monkeypatch):
    monkeypatch.delenv("CURLY_DEBUG", raising=False)
    logger = setup_logging()
    assert logger.name == "curly"
    assert logger.level == logging.WARNING
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.propagate is False


def test_setup_logging_verbose(monkeypatch):
    monkeypatch.delenv("CURLY_DEBUG", raising=False)
    assert setup_logging(verbose=True).level == logging.INFO


def test_setup_logging_debug_env(monkeypatch, caplog):
    monkeypatch.setenv("CURLY_DEBUG", "1")
    logger = setup_logging()
    assert logger.level == logging.DEBUG

    # caplog listens on the root logger, so let records through for this test
    logger.propagate = True
    with caplog.at_level(logging.DEBUG, logger="curly"):
        curly.compile("{. title}")
    assert any("Dispatching macro '.'" in r.getMessage() for r in caplog.records)
    assert any("Compiled template" in r.getMessage() for r in caplog.records)


def test_setup_logging_is_public_api():
    assert curly.setup_logging is setup_logging
    assert "setup_logging" in curly.__all__
