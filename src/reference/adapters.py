"""
Adapters — нормализация сырых записей документной БД в доменные модели

Единственное место, где известна схема имён полей документов:
префикс типа рейса (Dom/Int) + название класса, например "IntFirstLimit",
"WeightSystemDomEconomyFee", "PieceSystemIntBusinessFee".

Правила нормализации:
- Запись проверяется JSON Schema контрактом до разбора
- Булевы флаги строгие; отсутствующий флаг = False
- Страна: usesPieceSystem, либо legacy WeightSystem (piece = not WeightSystem);
  без обоих флагов страна считается weight-системой
- DomCountry "none" / пустая строка = нет домашней страны
- Отсутствующая валюта = валюта по умолчанию (настройка, "$")
"""

from typing import Any, Final, Mapping, Optional

from src.core.contracts import (
    AirlineRecordValidator,
    CatalogItemValidator,
    CountryRecordValidator,
)
from src.core.domain.flight import ClassType, FlightType
from src.core.domain.items import CatalogItem
from src.core.domain.reference import Airline, Country
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)


# =============================================================================
# FIELD NAMING
# =============================================================================

FLIGHT_TYPE_PREFIX: Final[dict[FlightType, str]] = {
    FlightType.DOMESTIC: "Dom",
    FlightType.INTERNATIONAL: "Int",
}

CLASS_LABEL: Final[dict[ClassType, str]] = {
    ClassType.ECONOMY: "Economy",
    ClassType.BUSINESS: "Business",
    ClassType.FIRST: "First",
}

DEFAULT_CURRENCY: Final[str] = "$"

_NO_HOME_COUNTRY: Final[frozenset[str]] = frozenset({"", "none"})


def limit_field(class_type: ClassType, flight_type: FlightType) -> str:
    """Имя поля лимита: "DomEconomyLimit", "IntFirstLimit", ..."""
    return f"{FLIGHT_TYPE_PREFIX[flight_type]}{CLASS_LABEL[class_type]}Limit"


def weight_fee_field(class_type: ClassType, flight_type: FlightType) -> str:
    """Имя поля тарифа за кг: "WeightSystemIntBusinessFee", ..."""
    return f"WeightSystem{FLIGHT_TYPE_PREFIX[flight_type]}{CLASS_LABEL[class_type]}Fee"


def piece_fee_field(class_type: ClassType) -> str:
    """Имя поля тарифа за место (только международная таблица)."""
    return f"PieceSystemInt{CLASS_LABEL[class_type]}Fee"


def humanize_id(record_id: str) -> str:
    """
    Отображаемое имя из идентификатора документа.

    Examples:
        >>> humanize_id("united-kingdom")
        'United Kingdom'
        >>> humanize_id("turkish")
        'Turkish'
    """
    words = record_id.replace("-", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


# =============================================================================
# COUNTRY
# =============================================================================


def country_from_record(country_id: str, raw: Mapping[str, Any]) -> Country:
    """
    Нормализация сырой записи страны.

    Args:
        country_id: Идентификатор документа (например, "united-kingdom")
        raw: Сырая запись

    Returns:
        Country со строгим булевым uses_piece_system

    Raises:
        ContractViolationError: Если запись не проходит контракт
    """
    CountryRecordValidator().check(raw, country_id)

    if "usesPieceSystem" in raw:
        uses_piece_system = raw["usesPieceSystem"]
    elif "WeightSystem" in raw:
        uses_piece_system = not raw["WeightSystem"]
    else:
        uses_piece_system = False

    return Country(
        id=country_id,
        name=raw.get("name") or humanize_id(country_id),
        uses_piece_system=uses_piece_system,
    )


# =============================================================================
# AIRLINE
# =============================================================================


def _currency(raw: Mapping[str, Any], field: str, airline_id: str, default: str) -> str:
    value = raw.get(field)
    if value:
        return value
    logger.debug("Airline %s has no %s, using default %r", airline_id, field, default)
    return default


def _home_country(raw: Mapping[str, Any]) -> Optional[str]:
    value = raw.get("DomCountry")
    if value is None or value.strip().lower() in _NO_HOME_COUNTRY:
        return None
    return value


def airline_from_record(
    airline_id: str,
    raw: Mapping[str, Any],
    default_currency: str = DEFAULT_CURRENCY,
) -> Airline:
    """
    Нормализация сырой записи авиакомпании в двумерные таблицы.

    Поля, отсутствующие в документе, в таблицы не попадают: отсутствие
    ключа означает "комбинация не продаётся" (лимит) или "тариф не задан".

    Args:
        airline_id: Идентификатор документа (например, "turkish")
        raw: Сырая запись
        default_currency: Валюта для записей без currency / InternationalCurrency

    Returns:
        Airline

    Raises:
        ContractViolationError: Если запись не проходит контракт
    """
    AirlineRecordValidator().check(raw, airline_id)

    limits: dict[tuple[ClassType, FlightType], float] = {}
    weight_fees: dict[tuple[ClassType, FlightType], float] = {}
    piece_fees: dict[ClassType, float] = {}

    for class_type in ClassType:
        for flight_type in FlightType:
            key = (class_type, flight_type)
            if limit_field(class_type, flight_type) in raw:
                limits[key] = float(raw[limit_field(class_type, flight_type)])
            if weight_fee_field(class_type, flight_type) in raw:
                weight_fees[key] = float(raw[weight_fee_field(class_type, flight_type)])
        if piece_fee_field(class_type) in raw:
            piece_fees[class_type] = float(raw[piece_fee_field(class_type)])

    return Airline(
        id=airline_id,
        name=raw.get("name") or humanize_id(airline_id),
        supports_domestic_flights=raw.get("DomesticFlights", False),
        supports_first_class=raw.get("FirstClass", False),
        domestic_home_country_id=_home_country(raw),
        limits=limits,
        weight_system_fees=weight_fees,
        piece_system_fees=piece_fees,
        domestic_currency=_currency(raw, "currency", airline_id, default_currency),
        international_currency=_currency(
            raw, "InternationalCurrency", airline_id, default_currency
        ),
    )


# =============================================================================
# CATALOG ITEM
# =============================================================================


def catalog_item_from_record(item_id: str, raw: Mapping[str, Any]) -> CatalogItem:
    """
    Нормализация сырой записи предмета каталога.

    Raises:
        ContractViolationError: Если запись не проходит контракт
    """
    CatalogItemValidator().check(raw, item_id)
    return CatalogItem(
        id=item_id,
        name=raw["name"],
        weight=float(raw["weight"]),
        category=raw["category"],
    )
