"""
Tests for logging configuration.
"""

import logging

from selectorstore.logging_config import NO_KEY, StoreKeyFilter, TraversalLogAdapter, get_logger, setup_logging


def test_get_logger_binds_store_key():
    logger = get_logger("selectorstore.test", key="v1-abc")

    assert isinstance(logger, TraversalLogAdapter)
    assert logger.key == "v1-abc"
    assert get_logger("selectorstore.test").key == NO_KEY


def test_call_site_extra_is_merged(caplog):
    logger = get_logger("selectorstore.test", key="v1-abc")

    with caplog.at_level(logging.INFO, logger="selectorstore.test"):
        logger.info("Committed traversal", extra={"records": 3})

    (record,) = caplog.records
    assert record.store_key == "v1-abc"
    assert record.records == 3


def test_setup_logging_text_format(monkeypatch):
    monkeypatch.setenv("SELSTORE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SELSTORE_LOG_FORMAT", "text")
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert any(isinstance(f, StoreKeyFilter) for f in root.handlers[0].filters)
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_setup_logging_unknown_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("SELSTORE_LOG_LEVEL", "chatty")
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging()

        assert root.level == logging.INFO
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_store_key_filter_fills_missing():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

    assert StoreKeyFilter().filter(record)
    assert record.store_key == NO_KEY
