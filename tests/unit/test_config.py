"""
Unit tests for configuration management.
"""

import logging

import pytest

from pickup.config import Settings, configure_logging, get_settings


class TestSettings:
    """Test Settings class."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("PYTHON_ENV", raising=False)

        settings = Settings(_env_file=None)

        assert settings.python_env == "development"
        assert settings.database_url == "sqlite:///./data/pickup.db"
        assert settings.default_event_duration_minutes == 60
        assert settings.max_event_duration_minutes == 24 * 60
        assert settings.is_development
        assert settings.uses_sqlite
        assert not settings.uses_postgresql

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://pickup@localhost/pickup")
        monkeypatch.setenv("DEFAULT_EVENT_DURATION_MINUTES", "45")

        settings = Settings(_env_file=None)

        assert settings.uses_postgresql
        assert settings.default_event_duration_minutes == 45

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestProductionValidation:

    def test_development_skips_validation(self):
        Settings(_env_file=None, python_env="development").validate_production_config()

    def test_production_requires_postgresql(self):
        settings = Settings(
            _env_file=None,
            python_env="production",
            database_url="sqlite:///./data/pickup.db",
        )

        with pytest.raises(ValueError, match="PostgreSQL"):
            settings.validate_production_config()

    def test_production_with_postgresql(self):
        settings = Settings(
            _env_file=None,
            python_env="production",
            database_url="postgresql://pickup@db/pickup",
        )

        settings.validate_production_config()

    def test_default_duration_over_max(self):
        settings = Settings(
            _env_file=None,
            python_env="production",
            database_url="postgresql://pickup@db/pickup",
            default_event_duration_minutes=120,
            max_event_duration_minutes=60,
        )

        with pytest.raises(ValueError, match="DEFAULT_EVENT_DURATION_MINUTES"):
            settings.validate_production_config()


class TestConfigureLogging:

    def test_applies_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(Settings(_env_file=None, log_level="WARNING"))
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)
