"""Tests for configuration."""
import importlib

import bookdash.config


def test_defaults(monkeypatch):
    for name in ["BOOKS_API_URL", "PAGE_SIZE", "NOTIFICATION_SECONDS", "DEFAULT_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)
    config = importlib.reload(bookdash.config).Config()
    
    assert config.BOOKS_API_URL == "http://localhost:4000"
    assert config.PAGE_SIZE == 10
    assert config.NOTIFICATION_SECONDS == 3.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BOOKS_API_URL", "http://books.example:8080")
    monkeypatch.setenv("PAGE_SIZE", "25")
    config = importlib.reload(bookdash.config).Config()
    
    assert config.BOOKS_API_URL == "http://books.example:8080"
    assert config.PAGE_SIZE == 25
    
    monkeypatch.delenv("BOOKS_API_URL")
    monkeypatch.delenv("PAGE_SIZE")
    importlib.reload(bookdash.config)
