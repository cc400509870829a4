"""
Traversal — ограниченный и отменяемый обход внешнего набора записей

Аналитика может обходить журналы всех пользователей. Если UI-контекст,
запросивший обход, закрыт посреди обхода, вызывающий код отменяет токен:
обход прерывается AnalyticsCancelledError и частичный результат не
возвращается вовсе.
"""

import threading
from typing import Iterable, Optional, TypeVar

from src.core.errors import AnalyticsCancelledError
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CancellationToken:
    """Потокобезопасный флаг отмены."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, processed: int) -> None:
        """
        Raises:
            AnalyticsCancelledError: Если токен отменён
        """
        if self._event.is_set():
            raise AnalyticsCancelledError(processed)


def collect(
    records: Iterable[T],
    token: Optional[CancellationToken] = None,
    max_records: int = 100_000,
) -> list[T]:
    """
    Материализация записей с проверкой отмены на каждом шаге.

    Args:
        records: Источник записей (может быть ленивым)
        token: Токен отмены (None — обход не отменяем)
        max_records: Граница обхода; записи сверх неё не читаются

    Returns:
        Прочитанные записи (не более max_records)

    Raises:
        AnalyticsCancelledError: Если токен отменён до завершения обхода
    """
    if max_records < 1:
        raise ValueError(f"max_records must be >= 1, got {max_records}")

    collected: list[T] = []
    for record in records:
        if token is not None:
            token.raise_if_cancelled(len(collected))
        if len(collected) >= max_records:
            logger.warning("Traversal bound reached: %d records, rest skipped", max_records)
            break
        collected.append(record)

    # Отмена после последней записи тоже отбрасывает результат
    if token is not None:
        token.raise_if_cancelled(len(collected))

    logger.debug("Traversal collected %d records", len(collected))
    return collected
