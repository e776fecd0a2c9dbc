# backend/tests/unit/test_settings.py
import pytest
from pydantic import ValidationError

from guidebot.config.settings import Settings


def test_cors_origins_accept_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000, https://cruisedot.co.kr")

    loaded = Settings()

    assert loaded.cors_allowed_origins == ["http://localhost:3000", "https://cruisedot.co.kr"]


def test_cors_origins_accept_single_origin_env(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")

    assert Settings().cors_allowed_origins == ["http://localhost:3000"]


def test_cors_origins_default_when_unset(monkeypatch):
    monkeypatch.delenv("CORS_ALLOWED_ORIGINS", raising=False)

    loaded = Settings(_env_file=None)

    assert loaded.cors_allowed_origins == ["https://cruisedot.co.kr", "https://www.cruisedot.co.kr"]


def test_placeholder_origin_must_be_absolute(monkeypatch):
    monkeypatch.setenv("TERMINAL_PLACEHOLDER_ORIGIN", "localhost")

    with pytest.raises(ValidationError):
        Settings()


def test_placeholder_origin_drops_trailing_slash(monkeypatch):
    monkeypatch.setenv("TERMINAL_PLACEHOLDER_ORIGIN", "https://cruisedot.co.kr/")

    assert Settings().terminal_placeholder_origin == "https://cruisedot.co.kr"
