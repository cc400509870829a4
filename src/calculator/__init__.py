"""Calculator — сервис расчёта для сессии пользователя."""

from .config import EngineConfig
from .service import CalculationReport, LuggageCalculator

__all__ = ["CalculationReport", "EngineConfig", "LuggageCalculator"]
