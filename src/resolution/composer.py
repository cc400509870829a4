"""Outcome Composer — конечный автомат одного расчёта

Состояния:
    NO_SELECTION → PENDING → {NOT_OFFERED, NO_VIOLATION, VIOLATION}

- NO_SELECTION: не заполнено хотя бы одно поле Selection
  → IncompleteSelectionError (UI блокирует расчёт)
- PENDING → NOT_OFFERED: STAGE 3 не нашёл норму для (класс, тип рейса)
- PENDING → NO_VIOLATION: total_weight <= limit, сбора нет
- PENDING → VIOLATION: total_weight > limit, сбор из STAGE 4

Каждый переход одноразовый: повторов нет, новый расчёт = новый обход.
Композитор stateless; справочные записи передаются уже разрешёнными.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.flight import Selection
from src.core.domain.outcome import CalculationOutcome, OutcomeState
from src.core.domain.reference import Airline, Country
from src.core.errors import IncompleteSelectionError, ReferenceDataMissingError
from src.core.math.numerical_safeguards import exceeds, validate_non_negative
from src.resolution import messages
from src.resolution.stages.stage_02_accounting_system import (
    AccountingSystemResolver,
    SystemResolution,
)
from src.resolution.stages.stage_03_limit_offer import LimitResolution, LimitResolver
from src.resolution.stages.stage_04_fee import FeeCalculator


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class CompositionResult:
    """Результат композитора."""

    state: OutcomeState
    outcome: Optional[CalculationOutcome]  # None для NOT_OFFERED

    # Сообщение для пользователя (для NOT_OFFERED: причина отказа)
    message: str

    # Промежуточные результаты стадий
    limit_resolution: LimitResolution
    system_resolution: Optional[SystemResolution]  # None для NOT_OFFERED

    # Диагностика
    transition_reason: str
    details: str


# =============================================================================
# COMPOSER
# =============================================================================


class OutcomeComposer:
    """
    Конечный автомат расчёта.

    Порядок:
    1. Проверка полноты Selection (NO_SELECTION)
    2. Проверка соответствия справочных записей выбору
    3. STAGE 3: норма (NOT_OFFERED)
    4. STAGE 2: система учёта
    5. Сравнение с нормой (NO_VIOLATION / VIOLATION)
    6. STAGE 4: сбор (только VIOLATION)
    """

    def __init__(
        self,
        limit_resolver: LimitResolver | None = None,
        system_resolver: AccountingSystemResolver | None = None,
        fee_calculator: FeeCalculator | None = None,
    ):
        self.limit_resolver = limit_resolver or LimitResolver()
        self.system_resolver = system_resolver or AccountingSystemResolver()
        self.fee_calculator = fee_calculator or FeeCalculator()

    def evaluate(
        self,
        total_weight: float,
        selection: Selection,
        airline: Airline,
        origin: Country,
        destination: Country,
    ) -> CompositionResult:
        """
        Один проход автомата.

        Args:
            total_weight: Суммарный вес (кг, из STAGE 1)
            selection: Выбор пользователя
            airline: Авиакомпания selection.airline_id
            origin: Страна selection.origin_country_id
            destination: Страна selection.destination_country_id

        Returns:
            CompositionResult в терминальном состоянии

        Raises:
            IncompleteSelectionError: Если Selection заполнен не полностью
            ReferenceDataMissingError: Если записи не соответствуют Selection
                или для нарушения не задан тариф
        """
        # 1. NO_SELECTION
        missing = selection.missing_fields()
        if missing:
            raise IncompleteSelectionError(missing)

        validate_non_negative(total_weight, "total_weight")

        # 2. Записи должны быть именно теми, что выбраны
        self._check_records(selection, airline, origin, destination)

        # 3. PENDING → NOT_OFFERED
        limit_resolution = self.limit_resolver.evaluate(
            airline, selection.class_type, selection.flight_type
        )
        if not limit_resolution.offered:
            return CompositionResult(
                state=OutcomeState.NOT_OFFERED,
                outcome=None,
                message=limit_resolution.message,
                limit_resolution=limit_resolution,
                system_resolution=None,
                transition_reason="limit_not_offered",
                details=(
                    f"{airline.id}: no limit for "
                    f"{selection.class_type.value}/{selection.flight_type.value}"
                ),
            )

        weight_limit = limit_resolution.weight_limit

        # 4. Система учёта
        system_resolution = self.system_resolver.evaluate(origin, destination)

        # 5. PENDING → NO_VIOLATION
        if not exceeds(total_weight, weight_limit):
            currency = airline.currency_for(selection.flight_type)
            outcome = CalculationOutcome(
                total_weight=total_weight,
                weight_limit=weight_limit,
                limit_exceeded=False,
                excess_weight=0.0,
                accounting_system=system_resolution.system,
                billable_units=0,
                unit_fee=0.0,
                fee=0.0,
                currency=currency,
                weight_message=messages.weight_summary(total_weight, weight_limit, False),
                fee_detail_message=messages.NO_FINE_MESSAGE,
            )
            return CompositionResult(
                state=OutcomeState.NO_VIOLATION,
                outcome=outcome,
                message=outcome.weight_message,
                limit_resolution=limit_resolution,
                system_resolution=system_resolution,
                transition_reason="within_limit",
                details=f"total={total_weight:.3f}kg <= limit={weight_limit}kg",
            )

        # 6. PENDING → VIOLATION
        quote = self.fee_calculator.evaluate(
            system_resolution.system,
            selection.class_type,
            selection.flight_type,
            airline,
            total_weight,
            weight_limit,
        )
        outcome = CalculationOutcome(
            total_weight=total_weight,
            weight_limit=weight_limit,
            limit_exceeded=True,
            excess_weight=quote.excess_weight,
            accounting_system=quote.system,
            billable_units=quote.billable_units,
            unit_fee=quote.unit_fee,
            fee=quote.fee,
            currency=quote.currency,
            weight_message=messages.weight_summary(total_weight, weight_limit, True),
            fee_detail_message=quote.detail,
        )
        return CompositionResult(
            state=OutcomeState.VIOLATION,
            outcome=outcome,
            message=outcome.weight_message,
            limit_resolution=limit_resolution,
            system_resolution=system_resolution,
            transition_reason="limit_exceeded",
            details=(
                f"total={total_weight:.3f}kg > limit={weight_limit}kg, "
                f"system={quote.system.value}, fee={quote.fee}{quote.currency}"
            ),
        )

    def _check_records(
        self, selection: Selection, airline: Airline, origin: Country, destination: Country
    ) -> None:
        """Записи не подменяются: id каждой записи совпадает с выбором."""
        if airline.id != selection.airline_id:
            raise ReferenceDataMissingError(
                "Airline", selection.airline_id, f"got record {airline.id!r}"
            )
        if origin.id != selection.origin_country_id:
            raise ReferenceDataMissingError(
                "Country", selection.origin_country_id, f"got origin record {origin.id!r}"
            )
        if destination.id != selection.destination_country_id:
            raise ReferenceDataMissingError(
                "Country",
                selection.destination_country_id,
                f"got destination record {destination.id!r}",
            )


def compose_outcome(
    total_weight: float,
    selection: Selection,
    airline: Airline,
    origin: Country,
    destination: Country,
) -> CompositionResult:
    """Один проход автомата с компонентами по умолчанию."""
    return OutcomeComposer().evaluate(total_weight, selection, airline, origin, destination)
