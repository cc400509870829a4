"""STAGE 4: Расчёт сбора за превышение

Вызывается только при нарушении (total_weight > limit); результат без
нарушения формируется композитором отдельно и сюда не попадает.

Weight-система:
    excess = total_weight - limit
    billable_units = ceil(excess)   (частичный кг всегда в пользу авиакомпании)
    fee = billable_units * тариф(класс, тип рейса)
    валюта: domestic для внутренних рейсов, international для международных

Piece-система:
    fee = тариф за место(класс) из международной таблицы, без умножения
    валюта: всегда international
    Количество мест из веса не выводится (таких данных нет).

Отсутствующий тариф → ReferenceDataMissingError (никогда не 0).
"""

from dataclasses import dataclass

from src.core.domain.flight import AccountingSystem, ClassType, FlightType
from src.core.domain.reference import Airline
from src.core.errors import ReferenceDataMissingError
from src.core.math.numerical_safeguards import (
    ceil_with_tolerance,
    exceeds,
    validate_non_negative,
)
from src.resolution import messages


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class FeeQuote:
    """Результат STAGE 4."""

    system: AccountingSystem
    fee: float
    currency: str

    unit_fee: float  # Тариф за кг (weight) или за место (piece)
    billable_units: int  # Оплачиваемые кг (weight) или 1 место (piece)
    excess_weight: float  # Превышение (кг)

    detail: str


# =============================================================================
# STAGE 4
# =============================================================================


class FeeCalculator:
    """STAGE 4: Сбор за превышение (stateless)."""

    def evaluate(
        self,
        system: AccountingSystem,
        class_type: ClassType,
        flight_type: FlightType,
        airline: Airline,
        total_weight: float,
        weight_limit: float,
    ) -> FeeQuote:
        """
        Args:
            system: Система учёта (из STAGE 2)
            class_type: Класс обслуживания
            flight_type: Тип рейса (для piece-системы не используется)
            airline: Авиакомпания
            total_weight: Суммарный вес (кг)
            weight_limit: Норма (кг, из STAGE 3)

        Returns:
            FeeQuote

        Raises:
            ValueError: Если нарушения нет (total_weight <= weight_limit)
            ReferenceDataMissingError: Если тариф для комбинации не задан
        """
        validate_non_negative(total_weight, "total_weight")
        validate_non_negative(weight_limit, "weight_limit")
        if not exceeds(total_weight, weight_limit):
            raise ValueError(
                f"Fee requested without a violation: total_weight={total_weight} "
                f"<= weight_limit={weight_limit}"
            )

        excess_weight = total_weight - weight_limit

        if system == AccountingSystem.PIECE:
            return self._piece_fee(airline, class_type, excess_weight)
        return self._weight_fee(airline, class_type, flight_type, excess_weight)

    def _weight_fee(
        self,
        airline: Airline,
        class_type: ClassType,
        flight_type: FlightType,
        excess_weight: float,
    ) -> FeeQuote:
        unit_fee = airline.weight_fee_for(class_type, flight_type)
        if unit_fee is None:
            raise ReferenceDataMissingError(
                "WeightSystemFee",
                airline.id,
                f"no per-kilogram fee for {class_type.value}/{flight_type.value}",
            )

        billable_units = ceil_with_tolerance(excess_weight)
        fee = billable_units * unit_fee
        currency = airline.currency_for(flight_type)

        return FeeQuote(
            system=AccountingSystem.WEIGHT,
            fee=fee,
            currency=currency,
            unit_fee=unit_fee,
            billable_units=billable_units,
            excess_weight=excess_weight,
            detail=messages.weight_fee_detail(unit_fee, fee, currency),
        )

    def _piece_fee(self, airline: Airline, class_type: ClassType, excess_weight: float) -> FeeQuote:
        unit_fee = airline.piece_fee_for(class_type)
        if unit_fee is None:
            raise ReferenceDataMissingError(
                "PieceSystemFee",
                airline.id,
                f"no international per-piece fee for {class_type.value}",
            )

        currency = airline.international_currency

        return FeeQuote(
            system=AccountingSystem.PIECE,
            fee=unit_fee,
            currency=currency,
            unit_fee=unit_fee,
            billable_units=1,
            excess_weight=excess_weight,
            detail=messages.piece_fee_detail(unit_fee, currency),
        )


def compute_fee(
    system: AccountingSystem,
    class_type: ClassType,
    flight_type: FlightType,
    airline: Airline,
    total_weight: float,
    weight_limit: float,
) -> FeeQuote:
    """
    Сбор за превышение нормы.

    Raises:
        ValueError: Если нарушения нет
        ReferenceDataMissingError: Если тариф не задан
    """
    return FeeCalculator().evaluate(
        system, class_type, flight_type, airline, total_weight, weight_limit
    )
