"""
AnalyticsAggregator — снимки аналитики поверх журналов

refresh() обходит записи всех пользователей и строит общий снимок
(гистограмма весов + рейтинг нарушений). user_summary() строит сводку одного
пользователя. Оба метода либо возвращают полный неизменяемый снимок, либо
бросают AnalyticsCancelledError: частичных снимков нет.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from src.analytics.config import AnalyticsConfig
from src.analytics.statistics import (
    CountryRankings,
    DirectionalDelta,
    RankedCount,
    WeightBucket,
    WindowedAverage,
    direction_average,
    directional_delta,
    recent_flights,
    top_countries,
    top_items_used,
    weight_histogram,
)
from src.analytics.traversal import CancellationToken, collect
from src.analytics.violations import (
    RecentViolation,
    ViolationGroup,
    recent_violations,
    violation_frequency_ranking,
)
from src.core.domain.flight import TripDirection
from src.core.domain.history import HistoryRecord
from src.history.log import HistoryLog
from src.reference.store import ReferenceStore
from src.utils.config import load_settings
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# SNAPSHOTS
# =============================================================================


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Общая аналитика по всем пользователям."""

    histogram: tuple[WeightBucket, ...]
    violation_ranking: tuple[ViolationGroup, ...]
    records_processed: int
    generated_at: datetime


@dataclass(frozen=True)
class UserAnalytics:
    """Сводка по журналу одного пользователя."""

    outbound_average: WindowedAverage
    inbound_average: WindowedAverage
    directional_delta: Optional[DirectionalDelta]
    top_items: tuple[RankedCount, ...]
    countries: CountryRankings
    recent_outbound: tuple[HistoryRecord, ...]
    recent_inbound: tuple[HistoryRecord, ...]
    recent_violations: tuple[RecentViolation, ...]
    records_processed: int


# =============================================================================
# AGGREGATOR
# =============================================================================


class AnalyticsAggregator:
    """
    Построение снимков аналитики.

    Без config окно, порог показа и граница обхода читаются из окружения
    (LUGGAGE_ANALYTICS_WINDOW, LUGGAGE_ANALYTICS_MIN_RECORDS,
    LUGGAGE_MAX_TRAVERSAL_RECORDS).
    """

    def __init__(
        self,
        reference_store: ReferenceStore,
        config: Optional[AnalyticsConfig] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.reference_store = reference_store
        self.config = config or AnalyticsConfig.from_settings(load_settings())
        self._clock = clock

    def refresh(
        self,
        records: Iterable[HistoryRecord],
        token: Optional[CancellationToken] = None,
    ) -> AnalyticsSnapshot:
        """
        Общий снимок по записям всех пользователей.

        Args:
            records: Записи журналов (обычно InMemoryHistoryRepository.iter_all_records())
            token: Токен отмены

        Returns:
            AnalyticsSnapshot

        Raises:
            AnalyticsCancelledError: Если обход отменён
        """
        collected = collect(records, token, self.config.max_records)

        histogram = weight_histogram(
            collected, self.config.histogram_buckets, self.config.bucket_width_kg
        )
        ranking = violation_frequency_ranking(
            collected, self.reference_store, limit=self.config.ranking_limit
        )

        # отмена во время агрегации тоже отбрасывает снимок
        if token is not None:
            token.raise_if_cancelled(len(collected))

        logger.info(
            "Analytics snapshot built: %d records, %d violation groups",
            len(collected),
            len(ranking),
        )
        return AnalyticsSnapshot(
            histogram=tuple(histogram),
            violation_ranking=tuple(ranking),
            records_processed=len(collected),
            generated_at=self._clock(),
        )

    def user_summary(
        self,
        history_log: HistoryLog,
        token: Optional[CancellationToken] = None,
    ) -> UserAnalytics:
        """
        Сводка по журналу пользователя.

        Raises:
            AnalyticsCancelledError: Если обход отменён
        """
        records = collect(history_log.records(), token, self.config.max_records)
        cfg = self.config

        summary = UserAnalytics(
            outbound_average=direction_average(records, TripDirection.OUTBOUND, cfg),
            inbound_average=direction_average(records, TripDirection.INBOUND, cfg),
            directional_delta=directional_delta(records, cfg.recency_window),
            top_items=tuple(top_items_used(history_log.usage_counters(), cfg.top_items_limit)),
            countries=top_countries(records, cfg.top_countries_limit),
            recent_outbound=tuple(
                recent_flights(records, TripDirection.OUTBOUND, cfg.recent_flights_limit)
            ),
            recent_inbound=tuple(
                recent_flights(records, TripDirection.INBOUND, cfg.recent_flights_limit)
            ),
            recent_violations=tuple(
                recent_violations(records, self.reference_store, cfg.recent_violations_limit)
            ),
            records_processed=len(records),
        )

        if token is not None:
            token.raise_if_cancelled(len(records))

        logger.debug("User analytics built from %d records", len(records))
        return summary
