"""
Settings — конфигурация из окружения

.env в корне проекта подхватывается через python-dotenv; все параметры
имеют безопасные значения по умолчанию, поэтому движок работает и без .env.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(BASE_DIR / ".env")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def env_log_level() -> str:
    """LOG_LEVEL из окружения в верхнем регистре (default INFO)."""
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"


@dataclass(frozen=True)
class Settings:
    """Параметры окружения."""

    default_currency: str = "$"
    analytics_window: int = 10
    analytics_min_records: int = 3
    max_traversal_records: int = 100_000
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.default_currency:
            raise ValueError("default_currency cannot be empty")
        if self.analytics_window < 1:
            raise ValueError(f"analytics_window must be >= 1, got {self.analytics_window}")
        if self.analytics_min_records < 1:
            raise ValueError(
                f"analytics_min_records must be >= 1, got {self.analytics_min_records}"
            )
        if self.max_traversal_records < 1:
            raise ValueError(
                f"max_traversal_records must be >= 1, got {self.max_traversal_records}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")


def load_settings() -> Settings:
    """
    Чтение Settings из окружения.

    Переменные:
        LUGGAGE_DEFAULT_CURRENCY, LUGGAGE_ANALYTICS_WINDOW,
        LUGGAGE_ANALYTICS_MIN_RECORDS, LUGGAGE_MAX_TRAVERSAL_RECORDS, LOG_LEVEL

    Raises:
        ValueError: Если числовая переменная не парсится или вне диапазона
    """
    return Settings(
        default_currency=os.getenv("LUGGAGE_DEFAULT_CURRENCY", "$").strip() or "$",
        analytics_window=_env_int("LUGGAGE_ANALYTICS_WINDOW", 10),
        analytics_min_records=_env_int("LUGGAGE_ANALYTICS_MIN_RECORDS", 3),
        max_traversal_records=_env_int("LUGGAGE_MAX_TRAVERSAL_RECORDS", 100_000),
        log_level=env_log_level(),
    )
