"""
Reference — справочные данные: страны и авиакомпании

Immutable Pydantic модели. Сырые записи документной БД нормализуются в эти
модели на границе (src.reference.adapters); внутри движка нет ни строковой
конкатенации имён полей, ни "truthiness" для булевых флагов.

Лимиты и тарифы хранятся как двумерные таблицы (ClassType, FlightType) → float.
Отсутствующий ключ или нулевой лимит означает, что авиакомпания не продаёт
эту комбинацию: это штатное состояние, а не пропуск данных.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictBool, field_validator

from src.core.domain.flight import ClassType, FlightType
from src.core.math.numerical_safeguards import validate_non_negative


# =============================================================================
# COUNTRY
# =============================================================================


class Country(BaseModel):
    """
    Страна вылета / прилёта.

    uses_piece_system=True: страна применяет оплату за место вместо оплаты
    за килограмм.
    """

    id: str = Field(..., min_length=1, description="Идентификатор страны")
    name: str = Field(..., min_length=1, description="Название страны")
    uses_piece_system: StrictBool = Field(..., description="Piece-система вместо weight-системы")

    model_config = {"frozen": True}


# =============================================================================
# AIRLINE
# =============================================================================


FareKey = tuple[ClassType, FlightType]


class Airline(BaseModel):
    """
    Авиакомпания с таблицами лимитов и тарифов.

    - limits: норма багажа (кг) по (класс, тип рейса)
    - weight_system_fees: тариф за кг превышения по (класс, тип рейса)
    - piece_system_fees: фиксированный тариф за место по классу;
      таблица только международная (piece-страны не имеют внутреннего тарифа)
    """

    id: str = Field(..., min_length=1, description="Идентификатор авиакомпании")
    name: str = Field(..., min_length=1, description="Отображаемое название")

    # Возможности
    supports_domestic_flights: StrictBool = Field(False, description="Выполняет внутренние рейсы")
    supports_first_class: StrictBool = Field(False, description="Продаёт первый класс")
    domestic_home_country_id: Optional[str] = Field(
        None, description="Домашняя страна для внутренних рейсов"
    )

    # Таблицы
    limits: dict[FareKey, float] = Field(default_factory=dict, description="Нормы багажа (кг)")
    weight_system_fees: dict[FareKey, float] = Field(
        default_factory=dict, description="Тариф за кг превышения"
    )
    piece_system_fees: dict[ClassType, float] = Field(
        default_factory=dict, description="Тариф за место (международная таблица)"
    )

    # Валюты
    domestic_currency: str = Field(..., min_length=1, description="Валюта внутренних рейсов")
    international_currency: str = Field(
        ..., min_length=1, description="Валюта международных рейсов"
    )

    model_config = {"frozen": True}

    @field_validator("limits", "weight_system_fees")
    @classmethod
    def validate_fare_table(cls, v: dict[FareKey, float]) -> dict[FareKey, float]:
        """Значения таблиц неотрицательные и конечные."""
        for (class_type, flight_type), value in v.items():
            validate_non_negative(value, f"{class_type.value}/{flight_type.value}")
        return v

    @field_validator("piece_system_fees")
    @classmethod
    def validate_piece_table(cls, v: dict[ClassType, float]) -> dict[ClassType, float]:
        for class_type, value in v.items():
            validate_non_negative(value, f"piece fee {class_type.value}")
        return v

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def limit_for(self, class_type: ClassType, flight_type: FlightType) -> Optional[float]:
        """
        Норма багажа для комбинации.

        Returns:
            Лимит (кг) или None, если комбинация не продаётся (нет ключа или 0)
        """
        limit = self.limits.get((class_type, flight_type))
        if not limit:
            return None
        return limit

    def weight_fee_for(self, class_type: ClassType, flight_type: FlightType) -> Optional[float]:
        """Тариф за кг превышения или None, если не задан."""
        return self.weight_system_fees.get((class_type, flight_type))

    def piece_fee_for(self, class_type: ClassType) -> Optional[float]:
        """Тариф за место (международная таблица) или None, если не задан."""
        return self.piece_system_fees.get(class_type)

    def currency_for(self, flight_type: FlightType) -> str:
        """Валюта тарифов weight-системы для типа рейса."""
        if flight_type == FlightType.DOMESTIC:
            return self.domestic_currency
        return self.international_currency

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def offered_classes(self) -> list[ClassType]:
        """Классы для выпадающего списка: economy и business всегда, first по флагу."""
        classes = [ClassType.ECONOMY, ClassType.BUSINESS]
        if self.supports_first_class:
            classes.append(ClassType.FIRST)
        return classes

    def offered_flight_types(self) -> list[FlightType]:
        """Типы рейса: international всегда, domestic по флагу."""
        if self.supports_domestic_flights:
            return [FlightType.DOMESTIC, FlightType.INTERNATIONAL]
        return [FlightType.INTERNATIONAL]
