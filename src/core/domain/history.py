"""
History — записи журнала расчётов и счётчики использования предметов

HistoryRecord — неизменяемая запись журнала (append-only, ключ — timestamp).
ItemUsageCounter — счётчик использования предмета пользователем.

Обе модели сериализуются в формат документной БД через алиасы полей
(model_dump(by_alias=True, mode="json")) и читаются обратно из него.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.flight import AccountingSystem, ClassType, FlightType, TripDirection


def _ensure_utc(value: datetime) -> datetime:
    # naive timestamps в журнале записаны в UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# =============================================================================
# HISTORY RECORD
# =============================================================================


class ItemUsed(BaseModel):
    """Предмет, участвовавший в расчёте (снимок на момент расчёта)."""

    name: str = Field(..., min_length=1)
    count: int = Field(..., ge=0)
    weight: float = Field(..., ge=0, allow_inf_nan=False, description="Вес единицы (кг)")

    model_config = {"frozen": True}


class HistoryRecord(BaseModel):
    """
    Запись журнала расчётов.

    origin / destination — отображаемые названия стран (а не идентификаторы),
    airline — идентификатор авиакомпании.
    """

    total_weight: float = Field(..., alias="totalWeight", allow_inf_nan=False)
    limit_passed: bool = Field(..., alias="limitPassed", description="Норма превышена")
    flight_type: FlightType = Field(..., alias="flightType")
    trip_type: TripDirection = Field(..., alias="tripType")
    class_type: ClassType = Field(..., alias="classType")
    airline: str = Field(..., min_length=1)
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    system: AccountingSystem = Field(...)
    calculated_at: datetime = Field(..., alias="calculatedAt")
    items_used: tuple[ItemUsed, ...] = Field(default=(), alias="itemsUsed")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("calculated_at")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return _ensure_utc(v)

    @property
    def log_id(self) -> str:
        """
        Ключ записи в журнале: ISO-8601 с заменой ':' и '.' на '-'.

        Example:
            2025-03-01T10:15:30.250Z → "2025-03-01T10-15-30-250Z"
        """
        ts = self.calculated_at
        return f"{ts:%Y-%m-%dT%H-%M-%S}-{ts.microsecond // 1000:03d}Z"

    def to_record(self) -> dict:
        """Запись в формате документной БД."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# ITEM USAGE COUNTER
# =============================================================================


class ItemUsageCounter(BaseModel):
    """
    Счётчик использования предмета (ключ — название предмета).

    times_used увеличивается на количество единиц в каждом расчёте,
    включающем предмет.
    """

    item_name: str = Field(..., min_length=1)
    times_used: int = Field(..., ge=0, alias="Times Used")
    first_time_used: datetime = Field(..., alias="First Time Used")
    last_time_used: datetime = Field(..., alias="Last Time Used")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("first_time_used", "last_time_used")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return _ensure_utc(v)

    def bump(self, count: int, used_at: datetime) -> "ItemUsageCounter":
        """Новый счётчик с учётом ещё одного расчёта."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return self.model_copy(
            update={
                "times_used": self.times_used + count,
                "last_time_used": _ensure_utc(used_at),
            }
        )

    @classmethod
    def first_use(cls, item_name: str, count: int, used_at: datetime) -> "ItemUsageCounter":
        used_at = _ensure_utc(used_at)
        return cls(
            item_name=item_name,
            times_used=count,
            first_time_used=used_at,
            last_time_used=used_at,
        )

    def to_record(self) -> dict:
        """Запись в формате документной БД (без ключа item_name)."""
        return self.model_dump(by_alias=True, mode="json", exclude={"item_name"})


def bump_usage(
    counter: Optional[ItemUsageCounter], item_name: str, count: int, used_at: datetime
) -> ItemUsageCounter:
    """Создать или увеличить счётчик использования предмета."""
    if counter is None:
        return ItemUsageCounter.first_use(item_name, count, used_at)
    return counter.bump(count, used_at)
