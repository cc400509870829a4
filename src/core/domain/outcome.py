"""
CalculationOutcome — результат одного расчёта

Immutable Pydantic модель. Создаётся один раз на расчёт, добавляется в
историю и больше никогда не изменяется. Ссылок на Selection / Airline не
хранит: повторный расчёт с теми же входами даёт идентичный объект.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.core.domain.flight import AccountingSystem


class OutcomeState(str, Enum):
    """
    Состояния композитора результата.

    NO_SELECTION → PENDING → {NOT_OFFERED, NO_VIOLATION, VIOLATION}
    """

    NO_SELECTION = "NO_SELECTION"
    PENDING = "PENDING"
    NOT_OFFERED = "NOT_OFFERED"
    NO_VIOLATION = "NO_VIOLATION"
    VIOLATION = "VIOLATION"


class CalculationOutcome(BaseModel):
    """
    Итог расчёта: вес, лимит, нарушение, система учёта, сбор.

    Для NO_VIOLATION fee == 0 и billable_units == 0.
    """

    # Вес и лимит
    total_weight: float = Field(..., ge=0, allow_inf_nan=False, description="Суммарный вес (кг)")
    weight_limit: float = Field(..., gt=0, allow_inf_nan=False, description="Норма багажа (кг)")
    limit_exceeded: bool = Field(..., description="Норма превышена")
    excess_weight: float = Field(..., ge=0, description="Превышение (кг), 0 без нарушения")

    # Сбор
    accounting_system: AccountingSystem = Field(..., description="Система учёта")
    billable_units: int = Field(..., ge=0, description="Оплачиваемые единицы (кг или места)")
    unit_fee: float = Field(..., ge=0, description="Применённый тариф за единицу")
    fee: float = Field(..., ge=0, description="Итоговый сбор")
    currency: str = Field(..., min_length=1, description="Валюта сбора")

    # Сообщения
    weight_message: str = Field(..., min_length=1, description="Сводка по весу")
    fee_detail_message: str = Field(..., min_length=1, description="Детализация сбора")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_fee_consistency(self) -> "CalculationOutcome":
        """Без нарушения нет ни сбора, ни оплачиваемых единиц."""
        if not self.limit_exceeded and (self.fee != 0 or self.billable_units != 0):
            raise ValueError("fee-free outcome cannot carry a fee or billable units")
        return self

    @property
    def state(self) -> OutcomeState:
        """Терминальное состояние, которое породило этот результат."""
        return OutcomeState.VIOLATION if self.limit_exceeded else OutcomeState.NO_VIOLATION
