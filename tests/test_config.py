"""
Configuration tests.
"""

import pytest

from excelsior_admin.config import Settings, get_settings


def test_get_settings_returns_settings() -> None:
    """get_settings returns a Settings instance."""
    settings = get_settings()
    assert isinstance(settings, Settings)


def test_settings_has_required_attributes() -> None:
    """Settings has all required attributes."""
    settings = get_settings()
    assert hasattr(settings, "database_url")
    assert hasattr(settings, "internal_job_token")
    assert hasattr(settings, "admin_api_token")
    assert settings.app_name == "Excelsior Admin"


def test_paging_defaults() -> None:
    """List paging defaults to size 10 capped at 100."""
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.default_page_size == 10
        assert settings.max_page_size == 100
    finally:
        get_settings.cache_clear()


def test_paging_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """DEFAULT_PAGE_SIZE and MAX_PAGE_SIZE load from env."""
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "20")
    monkeypatch.setenv("MAX_PAGE_SIZE", "50")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.default_page_size == 20
        assert settings.max_page_size == 50
    finally:
        get_settings.cache_clear()


def test_generic_postgres_url_gets_psycopg_driver(monkeypatch: pytest.MonkeyPatch) -> None:
    """A plain postgresql:// DATABASE_URL is rewritten to use psycopg3."""
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/excelsior")
    get_settings.cache_clear()
    try:
        assert get_settings().database_url == "postgresql+psycopg://u:p@db:5432/excelsior"
    finally:
        get_settings.cache_clear()


def test_sqlite_url_is_left_alone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///./local.db")
    get_settings.cache_clear()
    try:
        assert get_settings().database_url == "sqlite+pysqlite:///./local.db"
    finally:
        get_settings.cache_clear()
