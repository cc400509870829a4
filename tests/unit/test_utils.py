"""Тесты для настроек окружения и фабрики логгеров."""

import logging

import pytest

from src.utils import Settings, get_logger, load_settings
from src.utils.config import env_log_level


# =============================================================================
# SETTINGS
# =============================================================================


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings() == Settings()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("LUGGAGE_DEFAULT_CURRENCY", "€")
        monkeypatch.setenv("LUGGAGE_ANALYTICS_WINDOW", "5")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.default_currency == "€"
        assert settings.analytics_window == 5
        assert settings.log_level == "DEBUG"

    def test_blank_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv("LUGGAGE_DEFAULT_CURRENCY", "  ")
        monkeypatch.setenv("LUGGAGE_MAX_TRAVERSAL_RECORDS", "")
        settings = load_settings()
        assert settings.default_currency == "$"
        assert settings.max_traversal_records == 100_000

    def test_non_integer(self, monkeypatch):
        monkeypatch.setenv("LUGGAGE_ANALYTICS_MIN_RECORDS", "three")
        with pytest.raises(ValueError, match="LUGGAGE_ANALYTICS_MIN_RECORDS must be an integer"):
            load_settings()

    def test_out_of_range(self, monkeypatch):
        monkeypatch.setenv("LUGGAGE_ANALYTICS_WINDOW", "0")
        with pytest.raises(ValueError, match="analytics_window"):
            load_settings()

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="log_level"):
            load_settings()

    def test_log_level_matches_logger_source(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " warning ")
        assert env_log_level() == "WARNING"
        assert load_settings().log_level == env_log_level()


# =============================================================================
# LOGGING
# =============================================================================


class TestGetLogger:
    def test_child_of_project_logger(self):
        logger = get_logger("src.analytics.traversal")
        assert logger.name == "luggage.src.analytics.traversal"
        assert logger.propagate

    def test_project_name_not_prefixed_twice(self):
        assert get_logger("luggage.history").name == "luggage.history"
        assert get_logger().name == "luggage"

    def test_handlers_attached_once(self):
        get_logger("a")
        get_logger("b")
        root = logging.getLogger("luggage")
        stream_handlers = [h for h in root.handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1
