import logging

import pytest
import structlog

from cat_cache.observability import configure_logging


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def test_json_renderer_when_requested():
    configure_logging("cat-cache", "debug", json_logs=True)
    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)
    assert logging.getLogger().level == logging.DEBUG


def test_console_renderer_for_terminals(monkeypatch):
    monkeypatch.setattr("sys.stderr.isatty", lambda: True)
    configure_logging("cat-cache", "warning")
    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)


def test_unknown_level_falls_back_to_info():
    configure_logging("cat-cache", "chatty", json_logs=True)
    assert logging.getLogger().level == logging.INFO


def test_service_name_is_bound():
    configure_logging("cat-cache", json_logs=True)
    assert structlog.contextvars.get_contextvars()["service"] == "cat-cache"
