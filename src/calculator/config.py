"""Конфигурация движка расчёта."""

from dataclasses import dataclass

from src.utils.config import Settings


@dataclass(frozen=True)
class EngineConfig:
    """
    Параметры движка.

    default_currency подставляется авиакомпаниям без поля currency /
    InternationalCurrency в справочных записях.
    """

    default_currency: str = "$"

    def __post_init__(self):
        if not self.default_currency:
            raise ValueError("default_currency cannot be empty")

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineConfig":
        return cls(default_currency=settings.default_currency)
