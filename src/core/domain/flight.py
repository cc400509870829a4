"""
Flight — параметры рейса, выбираемые пользователем

Selection — явный value object сессии: вызывающий код собирает его из UI и
передаёт в движок; движок читает его один раз за вызов.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class ClassType(str, Enum):
    """Класс обслуживания"""

    ECONOMY = "economy"
    BUSINESS = "business"
    FIRST = "first"


class FlightType(str, Enum):
    """Тип рейса (определяет таблицу лимитов и тарифов)"""

    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


class TripDirection(str, Enum):
    """Направление поездки (используется только в аналитике)"""

    OUTBOUND = "outbound"
    INBOUND = "inbound"


class AccountingSystem(str, Enum):
    """Система учёта сверхнормативного багажа"""

    WEIGHT = "weight"  # Оплата за каждый килограмм превышения
    PIECE = "piece"  # Фиксированная оплата за место


# =============================================================================
# SELECTION
# =============================================================================


class Selection(BaseModel):
    """
    Выбор пользователя перед расчётом.

    Все поля допускают None, чтобы незаполненный выбор был представим;
    композитор блокирует расчёт, пока missing_fields() не пуст.

    Для domestic рейса обе страны обычно совпадают с домашней страной
    авиакомпании (обеспечивает UI); движок несовпадение переносит спокойно.
    """

    airline_id: Optional[str] = Field(None, description="Идентификатор авиакомпании")
    class_type: Optional[ClassType] = Field(None, description="Класс обслуживания")
    flight_type: Optional[FlightType] = Field(None, description="Тип рейса")
    trip_direction: Optional[TripDirection] = Field(None, description="Направление поездки")
    origin_country_id: Optional[str] = Field(None, description="Страна вылета")
    destination_country_id: Optional[str] = Field(None, description="Страна прилёта")

    model_config = {"frozen": True}

    def missing_fields(self) -> list[str]:
        """
        Список незаполненных обязательных полей.

        Пустая строка в идентификаторе считается незаполненным полем
        (так UI сообщает "ничего не выбрано").
        """
        missing = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()
