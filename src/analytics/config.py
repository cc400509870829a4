"""Конфигурация аналитики истории расчётов."""

from dataclasses import dataclass

from src.utils.config import Settings


@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Параметры аналитики.

    - recency_window: сколько последних расчётов усредняется
    - min_records_presentable: порог показа среднего (не ограничение расчёта)
    - histogram_buckets / bucket_width_kg: корзины [0,1) … [49,50) + [50,∞)
    - max_records: граница обхода внешнего набора записей
    """

    recency_window: int = 10
    min_records_presentable: int = 3
    histogram_buckets: int = 50
    bucket_width_kg: float = 1.0
    top_items_limit: int = 10
    top_countries_limit: int = 10
    ranking_limit: int = 10
    recent_flights_limit: int = 10
    recent_violations_limit: int = 15
    previous_weights_limit: int = 10
    max_records: int = 100_000

    def __post_init__(self):
        if self.recency_window < 1:
            raise ValueError(f"recency_window must be >= 1, got {self.recency_window}")
        if self.min_records_presentable < 1:
            raise ValueError(
                f"min_records_presentable must be >= 1, got {self.min_records_presentable}"
            )
        if self.histogram_buckets < 1:
            raise ValueError(f"histogram_buckets must be >= 1, got {self.histogram_buckets}")
        if self.bucket_width_kg <= 0:
            raise ValueError(f"bucket_width_kg must be positive, got {self.bucket_width_kg}")
        if self.max_records < 1:
            raise ValueError(f"max_records must be >= 1, got {self.max_records}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalyticsConfig":
        return cls(
            recency_window=settings.analytics_window,
            min_records_presentable=settings.analytics_min_records,
            max_records=settings.max_traversal_records,
        )
