"""Tests for settings loading from the environment."""

from __future__ import annotations

import pytest

from ratekey.core.config import AppSettings, LogSettings, Settings


def test_app_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_RATE_LIMIT_CATEGORIES", "APP_DEFAULT_CATEGORY", "APP_EXPOSE_RAW_KEYS"):
        monkeypatch.delenv(name, raising=False)

    app_settings = AppSettings()

    assert app_settings.rate_limit_categories == "requests,posts,comments"
    assert app_settings.default_category == "requests"
    assert app_settings.expose_raw_keys is False


def test_app_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_RATE_LIMIT_CATEGORIES", "uploads,votes")
    monkeypatch.setenv("APP_DEFAULT_CATEGORY", "votes")
    monkeypatch.setenv("APP_EXPOSE_RAW_KEYS", "true")

    app_settings = AppSettings()

    assert app_settings.rate_limit_categories == "uploads,votes"
    assert app_settings.default_category == "votes"
    assert app_settings.expose_raw_keys is True


def test_empty_default_category_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_DEFAULT_CATEGORY", "")

    with pytest.raises(ValueError):
        AppSettings()


def test_log_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_FORMAT", "plain")
    monkeypatch.setenv("LOG_REQUEST_ID_HEADER", "X-Correlation-ID")

    log_settings = LogSettings()

    assert log_settings.level == "warning"
    assert log_settings.format == "plain"
    assert log_settings.request_id_header == "X-Correlation-ID"


def test_settings_compose_nested_sections() -> None:
    settings = Settings()

    assert isinstance(settings.app, AppSettings)
    assert isinstance(settings.log, LogSettings)


def test_default_category_must_be_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_RATE_LIMIT_CATEGORIES", "posts,comments")
    monkeypatch.setenv("APP_DEFAULT_CATEGORY", "requests")

    with pytest.raises(ValueError, match="default_category"):
        AppSettings()


def test_categories_must_not_be_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_RATE_LIMIT_CATEGORIES", " , ")

    with pytest.raises(ValueError, match="at least one category"):
        AppSettings()
