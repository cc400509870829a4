"""Resolution — движок определения нормы и сбора за багаж.

Стадии выполняются в фиксированном порядке:
1. Суммирование веса (EmptySelectionError при пустом выборе)
2. Норма / доступность комбинации (NOT_OFFERED)
3. Система учёта по паре стран
4. Сбор за превышение (только при нарушении)

Композитор (OutcomeComposer) связывает стадии в конечный автомат.
"""

from .composer import CompositionResult, OutcomeComposer, compose_outcome
from .stages import (
    AccountingSystemResolver,
    FeeCalculator,
    FeeQuote,
    LimitResolution,
    LimitResolver,
    SystemResolution,
    WeightAggregation,
    WeightAggregator,
    aggregate,
    compute_fee,
    resolve_limit,
    resolve_system,
)

__all__ = [
    "CompositionResult",
    "OutcomeComposer",
    "compose_outcome",
    "AccountingSystemResolver",
    "FeeCalculator",
    "FeeQuote",
    "LimitResolution",
    "LimitResolver",
    "SystemResolution",
    "WeightAggregation",
    "WeightAggregator",
    "aggregate",
    "compute_fee",
    "resolve_limit",
    "resolve_system",
]
