"""
Calculation Log — неизменяемый журнал расчётов и счётчики предметов

Журнал append-only: запись с уже существующим ключом (timestamp) не
перезаписывается. Счётчики предметов увеличиваются на количество единиц
в каждом расчёте, включающем предмет.

Технология хранения вне зоны ответственности движка; in-memory реализация
фиксирует контракт и используется в тестах.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, Iterator, Mapping, Optional

from src.core.contracts import CalculationLogValidator, ItemUsageValidator
from src.core.domain.flight import Selection
from src.core.domain.history import HistoryRecord, ItemUsageCounter, ItemUsed, bump_usage
from src.core.domain.items import SelectedItem
from src.core.domain.outcome import CalculationOutcome
from src.core.domain.reference import Country
from src.core.errors import DuplicateLogEntryError, IncompleteSelectionError


# =============================================================================
# RECORD BUILDING
# =============================================================================


def build_history_record(
    outcome: CalculationOutcome,
    selection: Selection,
    items: Iterable[SelectedItem],
    origin: Country,
    destination: Country,
    calculated_at: datetime,
) -> HistoryRecord:
    """
    Запись журнала из результата расчёта.

    В itemsUsed попадают все добавленные предметы (как их видел пользователь),
    включая count == 0.

    Raises:
        IncompleteSelectionError: Если Selection заполнен не полностью
    """
    missing = selection.missing_fields()
    if missing:
        raise IncompleteSelectionError(missing)

    return HistoryRecord(
        total_weight=outcome.total_weight,
        limit_passed=outcome.limit_exceeded,
        flight_type=selection.flight_type,
        trip_type=selection.trip_direction,
        class_type=selection.class_type,
        airline=selection.airline_id,
        origin=origin.name,
        destination=destination.name,
        system=outcome.accounting_system,
        calculated_at=calculated_at,
        items_used=tuple(
            ItemUsed(name=item.name, count=item.count, weight=item.unit_weight)
            for item in items
        ),
    )


def export_record(record: HistoryRecord) -> dict:
    """
    Запись журнала в формате документной БД, проверенная контрактом.

    Raises:
        ContractViolationError: Если запись не проходит calculation_log контракт
    """
    data = record.to_record()
    CalculationLogValidator().check(data, record.log_id)
    return data


def history_record_from_raw(log_id: str, raw: Mapping[str, Any]) -> HistoryRecord:
    """
    Разбор сырой записи журнала (чтение истории из внешнего хранилища).

    Raises:
        ContractViolationError: Если запись не проходит calculation_log контракт
    """
    CalculationLogValidator().check(raw, log_id)
    return HistoryRecord.model_validate(dict(raw))


def export_usage_counter(counter: ItemUsageCounter) -> dict:
    """
    Счётчик в формате документной БД, проверенный контрактом.

    Raises:
        ContractViolationError: Если запись не проходит item_usage контракт
    """
    data = counter.to_record()
    ItemUsageValidator().check(data, counter.item_name)
    return data


# =============================================================================
# HISTORY LOG
# =============================================================================


class HistoryLog(ABC):
    """Журнал расчётов одного пользователя."""

    @abstractmethod
    def append(self, record: HistoryRecord) -> str:
        """
        Добавление записи.

        Returns:
            Ключ записи (log_id)

        Raises:
            DuplicateLogEntryError: Если запись с таким ключом уже существует
        """

    @abstractmethod
    def records(self) -> list[HistoryRecord]:
        """Все записи, новые первыми."""

    @abstractmethod
    def usage_counter(self, item_name: str) -> Optional[ItemUsageCounter]:
        """Счётчик использования предмета или None."""

    @abstractmethod
    def save_usage_counter(self, counter: ItemUsageCounter) -> None:
        """Сохранение счётчика (ключ — название предмета)."""

    @abstractmethod
    def usage_counters(self) -> list[ItemUsageCounter]:
        """Все счётчики пользователя."""

    def _usage_updates(
        self, items: Iterable[SelectedItem], used_at: datetime
    ) -> list[ItemUsageCounter]:
        # повторяющиеся названия складываются в один счётчик
        pending: dict[str, ItemUsageCounter] = {}
        for item in items:
            if item.count <= 0:
                continue
            current = pending.get(item.name) or self.usage_counter(item.name)
            pending[item.name] = bump_usage(current, item.name, item.count, used_at)
        return list(pending.values())

    def record_item_usage(
        self, items: Iterable[SelectedItem], used_at: datetime
    ) -> list[ItemUsageCounter]:
        """
        Увеличение счётчиков для предметов с count > 0.

        Returns:
            Обновлённые счётчики
        """
        updated = self._usage_updates(items, used_at)
        for counter in updated:
            self.save_usage_counter(counter)
        return updated

    def commit(self, record: HistoryRecord, items: Iterable[SelectedItem]) -> str:
        """
        Запись расчёта вместе со счётчиками предметов.

        Счётчики вычисляются до append: дубликат ключа или невалидный предмет
        не оставляют ни записи, ни обновлённых счётчиков.

        Returns:
            Ключ записи (log_id)

        Raises:
            DuplicateLogEntryError: Если запись с таким ключом уже существует
        """
        updated = self._usage_updates(items, record.calculated_at)
        log_id = self.append(record)
        for counter in updated:
            self.save_usage_counter(counter)
        return log_id


class InMemoryHistoryLog(HistoryLog):
    """Журнал в памяти."""

    def __init__(self, records: Iterable[HistoryRecord] = ()):
        self._records: dict[str, HistoryRecord] = {}
        self._counters: dict[str, ItemUsageCounter] = {}
        for record in records:
            self.append(record)

    def append(self, record: HistoryRecord) -> str:
        log_id = record.log_id
        if log_id in self._records:
            raise DuplicateLogEntryError(log_id)
        self._records[log_id] = record
        return log_id

    def records(self) -> list[HistoryRecord]:
        return sorted(self._records.values(), key=lambda r: r.calculated_at, reverse=True)

    def usage_counter(self, item_name: str) -> Optional[ItemUsageCounter]:
        return self._counters.get(item_name)

    def save_usage_counter(self, counter: ItemUsageCounter) -> None:
        self._counters[counter.item_name] = counter

    def usage_counters(self) -> list[ItemUsageCounter]:
        return list(self._counters.values())

    def __len__(self) -> int:
        return len(self._records)


class InMemoryHistoryRepository:
    """Журналы всех пользователей (для аналитики по всем пользователям)."""

    def __init__(self):
        self._logs: dict[str, InMemoryHistoryLog] = {}

    def log_for(self, user_id: str) -> InMemoryHistoryLog:
        """Журнал пользователя (создаётся при первом обращении)."""
        if user_id not in self._logs:
            self._logs[user_id] = InMemoryHistoryLog()
        return self._logs[user_id]

    def user_ids(self) -> list[str]:
        return sorted(self._logs)

    def iter_all_records(self) -> Iterator[HistoryRecord]:
        """Записи всех пользователей (ленивый обход по пользователям)."""
        for user_id in self.user_ids():
            yield from self._logs[user_id].records()
