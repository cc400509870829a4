"""
Statistics — агрегаты по журналу расчётов пользователя

Все функции принимают итерируемое HistoryRecord в произвольном порядке;
порядок «сначала новые» выводится из calculated_at. Функции чистые: один и
тот же набор записей всегда даёт один и тот же результат.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional

from src.analytics.config import AnalyticsConfig
from src.core.domain.flight import ClassType, TripDirection
from src.core.domain.history import HistoryRecord, ItemUsageCounter
from src.core.math.numerical_safeguards import format_weight, is_valid_float, round_half_up

DEFAULT_CONFIG = AnalyticsConfig()

RecordPredicate = Callable[[HistoryRecord], bool]


def newest_first(records: Iterable[HistoryRecord]) -> list[HistoryRecord]:
    """Записи по убыванию calculated_at (при равенстве — исходный порядок)."""
    return sorted(records, key=lambda r: r.calculated_at, reverse=True)


def _mean(values: list[float]) -> float:
    return math.fsum(values) / len(values)


# =============================================================================
# RECENCY-WINDOWED AVERAGE
# =============================================================================


@dataclass(frozen=True)
class WindowedAverage:
    """
    Среднее веса по последним N подходящим записям.

    presentable=False: записей меньше порога показа, но average всё равно
    рассчитан (None только если подходящих записей нет вовсе).
    """

    sample_size: int
    average: Optional[float]
    presentable: bool
    message: str = ""


def recency_windowed_average(
    records: Iterable[HistoryRecord],
    predicate: Optional[RecordPredicate] = None,
    window: int = DEFAULT_CONFIG.recency_window,
    min_records: int = DEFAULT_CONFIG.min_records_presentable,
) -> WindowedAverage:
    """
    Среднее totalWeight по window самым свежим записям, прошедшим predicate.

    Args:
        records: Записи журнала
        predicate: Фильтр записей (None — все)
        window: Размер окна
        min_records: Минимум записей для показа

    Returns:
        WindowedAverage
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    matching = [r for r in newest_first(records) if predicate is None or predicate(r)]
    sample = matching[:window]

    if not sample:
        return WindowedAverage(sample_size=0, average=None, presentable=False)

    return WindowedAverage(
        sample_size=len(sample),
        average=_mean([r.total_weight for r in sample]),
        presentable=len(sample) >= min_records,
    )


def direction_average(
    records: Iterable[HistoryRecord],
    direction: TripDirection,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> WindowedAverage:
    """
    Среднее по последним рейсам одного направления с сообщением для UI.

    Example:
        "According to your last 4 outbound flights, your average luggage
        weight is 18.3 kilograms."
    """
    result = recency_windowed_average(
        records,
        predicate=lambda r: r.trip_type == direction,
        window=config.recency_window,
        min_records=config.min_records_presentable,
    )
    if not result.presentable:
        return result

    message = (
        f"According to your last {result.sample_size} {direction.value} flights, "
        f"your average luggage weight is {format_weight(result.average)} kilograms."
    )
    return WindowedAverage(
        sample_size=result.sample_size,
        average=result.average,
        presentable=True,
        message=message,
    )


# =============================================================================
# DIRECTIONAL DELTA
# =============================================================================


@dataclass(frozen=True)
class DirectionalDelta:
    """Разница средних весов inbound и outbound."""

    outbound_average: float  # округлено до 0.1
    inbound_average: float  # округлено до 0.1
    difference: float  # |inbound - outbound|, округлено до 0.1
    trend: str  # "heavier" | "lighter" | "equal"
    message: str


def directional_delta(
    records: Iterable[HistoryRecord],
    window: int = DEFAULT_CONFIG.recency_window,
) -> Optional[DirectionalDelta]:
    """
    Сравнение среднего веса на обратном и прямом пути.

    Оба средних берутся по window самым свежим записям своего направления и
    округляются до одного знака до сравнения.

    Returns:
        DirectionalDelta или None, если у одного из направлений нет записей
    """
    records = list(records)
    outbound = recency_windowed_average(
        records, lambda r: r.trip_type == TripDirection.OUTBOUND, window=window
    )
    inbound = recency_windowed_average(
        records, lambda r: r.trip_type == TripDirection.INBOUND, window=window
    )
    if outbound.average is None or inbound.average is None:
        return None

    out_avg = round_half_up(outbound.average)
    in_avg = round_half_up(inbound.average)
    difference = round_half_up(abs(in_avg - out_avg))

    if in_avg > out_avg:
        trend = "heavier"
        message = (
            f"On average, you return with {format_weight(difference)} kilograms "
            f"of extra weight from trips."
        )
    elif in_avg < out_avg:
        trend = "lighter"
        message = (
            f"On average, you return with {format_weight(difference)} less "
            f"kilograms from trips."
        )
    else:
        trend = "equal"
        message = "On average, your outbound and inbound luggage weights are equal."

    return DirectionalDelta(
        outbound_average=out_avg,
        inbound_average=in_avg,
        difference=difference,
        trend=trend,
        message=message,
    )


# =============================================================================
# WEIGHT HISTOGRAM
# =============================================================================


@dataclass(frozen=True)
class WeightBucket:
    """Корзина гистограммы [lower, upper); upper=None — открытая корзина."""

    lower: float
    upper: Optional[float]
    count: int

    @property
    def label(self) -> str:
        if self.upper is None:
            return f"{self.lower:g}+ kg"
        return f"{self.lower:g}-{self.upper:g} kg"


def weight_histogram(
    records: Iterable[HistoryRecord],
    buckets: int = DEFAULT_CONFIG.histogram_buckets,
    bucket_width: float = DEFAULT_CONFIG.bucket_width_kg,
) -> list[WeightBucket]:
    """
    Распределение totalWeight по корзинам.

    buckets закрытых корзин ширины bucket_width плюс одна открытая
    [buckets * bucket_width, ∞). Отрицательные и нечисловые веса пропускаются.

    Returns:
        buckets + 1 корзин по возрастанию lower
    """
    counts = [0] * (buckets + 1)
    for record in records:
        weight = record.total_weight
        if not is_valid_float(weight) or weight < 0:
            continue
        index = min(int(weight // bucket_width), buckets)
        counts[index] += 1

    result = []
    for index, count in enumerate(counts):
        lower = index * bucket_width
        upper = None if index == buckets else (index + 1) * bucket_width
        result.append(WeightBucket(lower=lower, upper=upper, count=count))
    return result


# =============================================================================
# RANKINGS & RECENT VIEWS
# =============================================================================


@dataclass(frozen=True)
class RankedCount:
    name: str
    count: int


@dataclass(frozen=True)
class CountryRankings:
    """Страны, откуда пользователь чаще всего вылетает и куда летит."""

    departed_from: list[RankedCount] = field(default_factory=list)
    travelled_to: list[RankedCount] = field(default_factory=list)


def _rank(counter: Counter, limit: int) -> list[RankedCount]:
    # по убыванию частоты, при равенстве по имени
    ordered = sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
    return [RankedCount(name=name, count=count) for name, count in ordered[:limit]]


def top_items_used(
    counters: Iterable[ItemUsageCounter], limit: int = DEFAULT_CONFIG.top_items_limit
) -> list[RankedCount]:
    """Самые используемые предметы по счётчику "Times Used"."""
    usage = Counter()
    for counter in counters:
        if counter.times_used > 0:
            usage[counter.item_name] += counter.times_used
    return _rank(usage, limit)


def top_countries(
    records: Iterable[HistoryRecord], limit: int = DEFAULT_CONFIG.top_countries_limit
) -> CountryRankings:
    """Частота стран вылета и назначения по журналу."""
    departed = Counter()
    travelled = Counter()
    for record in records:
        departed[record.origin] += 1
        travelled[record.destination] += 1
    return CountryRankings(
        departed_from=_rank(departed, limit),
        travelled_to=_rank(travelled, limit),
    )


def recent_flights(
    records: Iterable[HistoryRecord],
    direction: TripDirection,
    limit: int = DEFAULT_CONFIG.recent_flights_limit,
) -> list[HistoryRecord]:
    """Последние расчёты одного направления, сначала новые."""
    return [r for r in newest_first(records) if r.trip_type == direction][:limit]


@dataclass(frozen=True)
class WeightEntry:
    calculated_at: datetime
    total_weight: float


def previous_weights(
    records: Iterable[HistoryRecord],
    airline_id: str,
    trip_direction: Optional[TripDirection] = None,
    class_type: Optional[ClassType] = None,
    limit: int = DEFAULT_CONFIG.previous_weights_limit,
) -> list[WeightEntry]:
    """
    Прошлые веса пользователя для авиакомпании (сначала новые).

    Args:
        records: Записи журнала
        airline_id: Авиакомпания
        trip_direction: Фильтр по направлению (None — любое)
        class_type: Фильтр по классу (None — любой)
        limit: Максимум записей
    """
    entries = []
    for record in newest_first(records):
        if record.airline != airline_id:
            continue
        if trip_direction is not None and record.trip_type != trip_direction:
            continue
        if class_type is not None and record.class_type != class_type:
            continue
        entries.append(WeightEntry(record.calculated_at, record.total_weight))
        if len(entries) >= limit:
            break
    return entries
