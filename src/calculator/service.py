"""
LuggageCalculator — сервис одного расчёта для сессии пользователя

Порядок:
1. STAGE 1: суммарный вес (EmptySelectionError)
2. Полнота Selection (IncompleteSelectionError)
3. Справочные записи по идентификаторам (ReferenceDataMissingError)
4. Композитор: NOT_OFFERED / NO_VIOLATION / VIOLATION
5. Для NO_VIOLATION / VIOLATION: запись в журнал + счётчики предметов
   одной операцией HistoryLog.commit (DuplicateLogEntryError)

Любая ошибка прерывает только текущий расчёт: сервис логирует её и
пробрасывает дальше, состояние UI остаётся прежним. NOT_OFFERED в журнал
не попадает (расчёта не было).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from src.calculator.config import EngineConfig
from src.core.domain.flight import Selection
from src.core.domain.history import HistoryRecord
from src.core.domain.items import SelectedItem
from src.core.domain.outcome import OutcomeState
from src.core.errors import IncompleteSelectionError, LuggageCalculationError
from src.history.log import HistoryLog, build_history_record
from src.reference.store import InMemoryReferenceStore, ReferenceStore
from src.resolution.composer import CompositionResult, OutcomeComposer
from src.resolution.stages.stage_01_weight_aggregation import WeightAggregator
from src.utils.config import load_settings
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CalculationReport:
    """Итог расчёта для UI."""

    composition: CompositionResult
    history_record: Optional[HistoryRecord]  # None для NOT_OFFERED или без журнала

    # Уведомление о piece-системе (пустое для weight-системы / NOT_OFFERED)
    piece_system_notice: str

    @property
    def state(self) -> OutcomeState:
        return self.composition.state


class LuggageCalculator:
    """
    Сервис расчёта.

    Сам по себе состояния не хранит: Selection и предметы передаются на
    каждый вызов, журнал и справочник — внешние коллабораторы.
    """

    def __init__(
        self,
        reference_store: ReferenceStore,
        history_log: Optional[HistoryLog] = None,
        composer: Optional[OutcomeComposer] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.reference_store = reference_store
        self.history_log = history_log
        self.composer = composer or OutcomeComposer()
        self.aggregator = WeightAggregator()
        self.clock = clock

    @classmethod
    def from_records(
        cls,
        airline_records: Mapping[str, Mapping[str, Any]],
        country_records: Mapping[str, Mapping[str, Any]],
        history_log: Optional[HistoryLog] = None,
        config: Optional[EngineConfig] = None,
    ) -> "LuggageCalculator":
        """
        Сервис поверх сырых справочных документов.

        Без config параметры читаются из окружения (LUGGAGE_DEFAULT_CURRENCY).

        Raises:
            ContractViolationError: Если справочная запись не проходит контракт
            ValueError: Если переменная окружения некорректна
        """
        config = config or EngineConfig.from_settings(load_settings())
        store = InMemoryReferenceStore.from_records(
            airline_records, country_records, config.default_currency
        )
        return cls(store, history_log=history_log)

    def calculate(self, items: Sequence[SelectedItem], selection: Selection) -> CalculationReport:
        """
        Расчёт для текущего выбора.

        Args:
            items: Добавленные предметы
            selection: Выбор пользователя

        Returns:
            CalculationReport

        Raises:
            EmptySelectionError: Нет предметов с count > 0
            IncompleteSelectionError: Selection заполнен не полностью
            ReferenceDataMissingError: Авиакомпания / страна / тариф не найдены
            DuplicateLogEntryError: Ключ журнала уже занят (расчёт в ту же миллисекунду)
        """
        try:
            return self._calculate(items, selection)
        except LuggageCalculationError as e:
            logger.warning("Calculation aborted: %s", e)
            raise

    def _calculate(self, items: Sequence[SelectedItem], selection: Selection) -> CalculationReport:
        aggregation = self.aggregator.evaluate(items)

        missing = selection.missing_fields()
        if missing:
            raise IncompleteSelectionError(missing)

        airline = self.reference_store.get_airline(selection.airline_id)
        origin = self.reference_store.get_country(selection.origin_country_id)
        destination = self.reference_store.get_country(selection.destination_country_id)

        composition = self.composer.evaluate(
            aggregation.total_weight, selection, airline, origin, destination
        )

        if composition.outcome is None:
            logger.info("Not offered: %s", composition.details)
            return CalculationReport(
                composition=composition, history_record=None, piece_system_notice=""
            )

        logger.info(
            "Calculation %s: %s (%s)",
            composition.state.value,
            composition.details,
            aggregation.details,
        )

        history_record = None
        if self.history_log is not None:
            calculated_at = self.clock()
            history_record = build_history_record(
                composition.outcome, selection, items, origin, destination, calculated_at
            )
            log_id = self.history_log.commit(history_record, items)
            logger.debug("Logged calculation %s", log_id)

        return CalculationReport(
            composition=composition,
            history_record=history_record,
            piece_system_notice=composition.system_resolution.notice,
        )
