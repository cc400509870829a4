"""Stages — индивидуальные стадии движка расчёта.

- STAGE 1: Суммирование веса
- STAGE 2: Система учёта (weight / piece)
- STAGE 3: Норма багажа и доступность комбинации
- STAGE 4: Сбор за превышение
"""

from .stage_01_weight_aggregation import WeightAggregation, WeightAggregator, aggregate
from .stage_02_accounting_system import (
    AccountingSystemResolver,
    SystemResolution,
    resolve_system,
)
from .stage_03_limit_offer import LimitResolution, LimitResolver, resolve_limit
from .stage_04_fee import FeeCalculator, FeeQuote, compute_fee

__all__ = [
    "WeightAggregation",
    "WeightAggregator",
    "aggregate",
    "AccountingSystemResolver",
    "SystemResolution",
    "resolve_system",
    "LimitResolution",
    "LimitResolver",
    "resolve_limit",
    "FeeCalculator",
    "FeeQuote",
    "compute_fee",
]
