"""Analytics — агрегаты по журналам расчётов."""

from .aggregator import AnalyticsAggregator, AnalyticsSnapshot, UserAnalytics
from .config import AnalyticsConfig
from .statistics import (
    CountryRankings,
    DirectionalDelta,
    RankedCount,
    WeightBucket,
    WeightEntry,
    WindowedAverage,
    direction_average,
    directional_delta,
    newest_first,
    previous_weights,
    recency_windowed_average,
    recent_flights,
    top_countries,
    top_items_used,
    weight_histogram,
)
from .traversal import CancellationToken, collect
from .violations import (
    RecentViolation,
    ViolationGroup,
    recent_violations,
    violation_frequency_ranking,
)

__all__ = [
    # Aggregator
    "AnalyticsAggregator",
    "AnalyticsSnapshot",
    "UserAnalytics",
    "AnalyticsConfig",
    # Traversal
    "CancellationToken",
    "collect",
    # Statistics
    "CountryRankings",
    "DirectionalDelta",
    "RankedCount",
    "WeightBucket",
    "WeightEntry",
    "WindowedAverage",
    "direction_average",
    "directional_delta",
    "newest_first",
    "previous_weights",
    "recency_windowed_average",
    "recent_flights",
    "top_countries",
    "top_items_used",
    "weight_histogram",
    # Violations
    "RecentViolation",
    "ViolationGroup",
    "recent_violations",
    "violation_frequency_ranking",
]
