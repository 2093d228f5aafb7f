"""Tests for environment-driven settings."""

from civicfeed.config import Settings


def test_cors_origins_default_to_wildcard():
    assert Settings(_env_file=None).CORS_ALLOW_ORIGINS == ["*"]


def test_cors_origins_accept_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.com, https://b.com,")
    assert Settings(_env_file=None).CORS_ALLOW_ORIGINS == ["https://a.com", "https://b.com"]


def test_cors_origins_accept_list():
    settings = Settings(_env_file=None, CORS_ALLOW_ORIGINS=["https://a.com"])
    assert settings.CORS_ALLOW_ORIGINS == ["https://a.com"]
