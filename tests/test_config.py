"""
Tests for settings resolution from environment.
"""

from __future__ import annotations

from pathlib import Path

import pytest

import echo_mirror.config.settings as settings_module
from echo_mirror.config import Settings, get_settings

ENV_VARS = [
    "PORT",
    "HOST",
    "APP_ENV",
    "NODE_ENV",
    "LOG_DIR",
    "READ_TIMEOUT_SEC",
    "WRITE_TIMEOUT_SEC",
    "IDLE_TIMEOUT_SEC",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No inherited env and no .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "load_env", lambda: False)


def test_defaults():
    """Port 3000, production mode, log/ directory, 15/15/60 timeouts."""
    s = get_settings()
    assert s == Settings()
    assert s.port == 3000
    assert s.log_dir == Path("log")
    assert s.is_development is False
    assert (s.read_timeout_sec, s.write_timeout_sec, s.idle_timeout_sec) == (15.0, 15.0, 60.0)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("LOG_DIR", "/tmp/echo-logs")
    monkeypatch.setenv("IDLE_TIMEOUT_SEC", "5")
    s = get_settings()
    assert s.port == 8080
    assert s.host == "127.0.0.1"
    assert s.log_dir == Path("/tmp/echo-logs")
    assert s.idle_timeout_sec == 5.0


def test_development_mode_from_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Development")
    assert get_settings().is_development is True


def test_node_env_fallback(monkeypatch):
    """NODE_ENV is honoured when APP_ENV is unset."""
    monkeypatch.setenv("NODE_ENV", "development")
    assert get_settings().is_development is True
    monkeypatch.setenv("APP_ENV", "staging")
    assert get_settings().is_development is False


def test_blank_port_uses_default(monkeypatch):
    monkeypatch.setenv("PORT", "  ")
    assert get_settings().port == 3000


@pytest.mark.parametrize("value", ["abc", "0", "70000"])
def test_invalid_port_rejected(monkeypatch, value):
    monkeypatch.setenv("PORT", value)
    with pytest.raises(ValueError, match="PORT"):
        get_settings()


def test_invalid_timeout_rejected(monkeypatch):
    monkeypatch.setenv("READ_TIMEOUT_SEC", "soon")
    with pytest.raises(ValueError, match="READ_TIMEOUT_SEC"):
        get_settings()
