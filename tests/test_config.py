"""
Settings tests
"""
import logging

from subsidy_engine.config import Settings, configure_logging


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SUBSIDY_CATALOG_PATH", "SUBSIDY_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.catalog_path is None
        assert settings.log_level == "INFO"
        assert set(Settings.model_fields) == {"app_name", "app_version", "log_level", "catalog_path"}

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SUBSIDY_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SUBSIDY_CATALOG_PATH", "/etc/subsidy/catalog_2027.json")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.catalog_path == "/etc/subsidy/catalog_2027.json"

    def test_configure_logging_uses_requested_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging("debug")

        assert calls[0]["level"] == "DEBUG"
