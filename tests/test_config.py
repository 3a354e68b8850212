from backoffice.config import DEFAULT_DATABASE_URL, Settings
from backoffice.errors import (
    ApiError, NotFoundError, StoreError, ValidationError, error_response, is_error,
)


def test_settings_defaults(monkeypatch):
    for name in ("DATABASE_URL", "DB_ECHO", "CORS_ORIGINS", "LOG_LEVEL", "APP_TITLE", "SERVER_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.db_echo is False
    assert settings.cors_origins == ["*"]
    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./store.db")
    monkeypatch.setenv("DB_ECHO", "true")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.database_url == "sqlite+aiosqlite:///./store.db"
    assert settings.db_echo is True
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == "DEBUG"


def test_error_variants_carry_fixed_status_codes():
    assert ValidationError("bad").status_code == 400
    assert NotFoundError("gone").status_code == 404
    assert StoreError("down").status_code == 500
    assert is_error(NotFoundError("gone"))
    assert not is_error(42)


def test_error_response_body():
    r = error_response(NotFoundError("Category not found"))
    assert r.status_code == 404
    assert r.body == b'{"error":"Category not found"}'
    assert isinstance(NotFoundError("x"), ApiError)
