"""Tests for environment configuration."""

from cocktail_finder.config import ServiceConfig


def test_defaults(monkeypatch):
    for name in [
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "SUGGESTION_COUNT",
        "FRONTEND_ORIGINS",
        "AUTH0_AUDIENCE",
        "AUTH0_ISSUER_BASE_URL",
        "RATE_LIMIT_MAX_REQUESTS",
        "PORT",
    ]:
        monkeypatch.delenv(name, raising=False)

    config = ServiceConfig.from_env()

    assert config.gemini_model == "gemini-2.0-flash"
    assert config.suggestion_count == 5
    assert config.frontend_origins == ("*",)
    assert config.rate_limit_max_requests == 100
    assert config.rate_limit_window_sec == 900
    assert config.port == 5000
    assert not config.auth_enabled


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("FRONTEND_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("AUTH0_AUDIENCE", "https://api.example")
    monkeypatch.setenv("AUTH0_ISSUER_BASE_URL", "https://tenant.example")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")

    config = ServiceConfig.from_env()

    assert config.frontend_origins == ("https://a.example", "https://b.example")
    assert config.auth_enabled
    assert config.port == 8080
    assert not config.rate_limit_enabled


def test_malformed_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("SUGGESTION_COUNT", "many")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SEC", "soon")

    config = ServiceConfig.from_env()

    assert config.suggestion_count == 5
    assert config.rate_limit_window_sec == 900
