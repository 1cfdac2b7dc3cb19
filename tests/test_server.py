"""Tests for the application factory module."""

import importlib
import logging

import server
from config import Config


class TestImport:
    """Importing the factory must not depend on the environment."""

    def test_reload_ignores_bad_environment(self, monkeypatch):
        monkeypatch.setenv("OAUTH_PORT", "abc")
        handlers = list(logging.getLogger().handlers)

        importlib.reload(server)

        assert logging.getLogger().handlers == handlers
        assert not hasattr(server, "app")


class TestLogStartup:
    """Tests for log_startup()."""

    def test_complete_config(self, caplog):
        config = Config({
            "GITHUB_CLIENT_ID": "id",
            "GITHUB_CLIENT_SECRET": "secret",
            "ALLOWED_ORIGINS": "https://a.example",
        })

        with caplog.at_level("INFO"):
            server.log_startup(config)

        assert "[STARTUP] Configuration loaded" in caplog.text
        assert "[STARTUP] Allowed origins: https://a.example" in caplog.text
        assert "secret" not in caplog.text

    def test_wildcard_warns(self, caplog):
        with caplog.at_level("INFO"):
            server.log_startup(Config({"ALLOWED_ORIGINS": "*"}))

        assert "ALLOWED_ORIGINS contains '*'" in caplog.text
