"""Tests for configuration and logging setup."""

import logging

from gridgames.game_server.config import ServerConfig
from gridgames.game_server.logging_config import setup_logging


def test_defaults(monkeypatch):
    for name in ("GRIDGAMES_API_KEY", "GRIDGAMES_SESSION_TTL", "GRIDGAMES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    cfg = ServerConfig.from_env()
    assert cfg.api_key == "dev-api-key-changeme"
    assert cfg.session_ttl == 3600.0
    assert cfg.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("GRIDGAMES_API_KEY", "secret")
    monkeypatch.setenv("GRIDGAMES_SESSION_TTL", "90")
    monkeypatch.setenv("GRIDGAMES_LOG_LEVEL", "debug")
    cfg = ServerConfig.from_env()
    assert cfg.api_key == "secret"
    assert cfg.session_ttl == 90.0
    assert cfg.log_level == "DEBUG"


def test_zero_ttl_disables_expiry(monkeypatch):
    monkeypatch.setenv("GRIDGAMES_SESSION_TTL", "0")
    assert ServerConfig.from_env().session_ttl is None


def test_setup_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        logger = setup_logging("DEBUG")
        assert logger is root
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
