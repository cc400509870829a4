"""History — журнал расчётов и счётчики использования предметов."""

from .log import (
    HistoryLog,
    InMemoryHistoryLog,
    InMemoryHistoryRepository,
    build_history_record,
    export_record,
    export_usage_counter,
    history_record_from_raw,
)

__all__ = [
    "HistoryLog",
    "InMemoryHistoryLog",
    "InMemoryHistoryRepository",
    "build_history_record",
    "export_record",
    "export_usage_counter",
    "history_record_from_raw",
]
