"""Tests for settings resolution and logging setup."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import JSONFormatter, Settings, get_logger, get_settings, setup_logging
from config.logging_config import LOGGER_NAMESPACE


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("API_BASE_URL", "ACCESS_TOKEN", "PAGE_SIZE", "LOG_LEVEL", "LOG_JSON", "REQUEST_TIMEOUT"):
        monkeypatch.delenv(f"SPENDVIEW_{name}", raising=False)

    settings = get_settings()

    assert settings.api_base_url == "http://localhost:8000"
    assert settings.access_token is None
    assert settings.page_size == 10
    assert settings.request_timeout == 10.0
    assert settings.log_json is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SPENDVIEW_API_BASE_URL", "https://expenses.example.com/")
    monkeypatch.setenv("SPENDVIEW_PAGE_SIZE", "25")
    monkeypatch.setenv("SPENDVIEW_LOG_JSON", "true")

    settings = get_settings()

    assert settings.page_size == 25
    assert settings.log_json is True
    assert settings.client_kwargs == {"base_url": "https://expenses.example.com", "timeout": 10.0}


def test_streamlit_secrets_take_precedence(monkeypatch):
    monkeypatch.setenv("SPENDVIEW_API_BASE_URL", "https://env.example.com")
    monkeypatch.setattr(
        st,
        "secrets",
        {"api": {"base_url": "https://secrets.example.com", "access_token": "tok"}},
        raising=False,
    )

    settings = get_settings()

    assert settings.api_base_url == "https://secrets.example.com"
    assert settings.access_token == "tok"


def test_invalid_page_size_is_rejected():
    with pytest.raises(ValueError):
        Settings(page_size=0)


def test_get_logger_is_namespaced():
    assert get_logger("core.store").name == f"{LOGGER_NAMESPACE}.core.store"


def test_setup_logging_replaces_handlers_on_rerun():
    settings = Settings(log_level="debug")

    setup_logging(settings)
    logger = setup_logging(settings)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(
        name="spendview.core.view",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Filter changed to %s",
        args=("Food",),
        exc_info=None,
    )
    record.criteria = {"category": "Food"}

    payload = json.loads(JSONFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["message"] == "Filter changed to Food"
    assert payload["extra"]["criteria"] == {"category": "Food"}
