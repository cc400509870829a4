"""Общие фикстуры: справочные записи, модели и журнал."""

from datetime import datetime, timedelta, timezone

import pytest

from src.core.domain import (
    AccountingSystem,
    ClassType,
    FlightType,
    HistoryRecord,
    ItemUsed,
    Selection,
    TripDirection,
)
from src.reference import InMemoryReferenceStore

ENV_VARS = (
    "LUGGAGE_DEFAULT_CURRENCY",
    "LUGGAGE_ANALYTICS_WINDOW",
    "LUGGAGE_ANALYTICS_MIN_RECORDS",
    "LUGGAGE_MAX_TRAVERSAL_RECORDS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Настройки по умолчанию независимо от окружения и .env."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# RAW RECORDS
# =============================================================================


@pytest.fixture
def airline_records():
    """Сырые документы авиакомпаний."""
    return {
        "turkish": {
            "name": "Turkish Airlines",
            "DomesticFlights": True,
            "FirstClass": False,
            "DomCountry": "turkey",
            "DomEconomyLimit": 23,
            "DomBusinessLimit": 32,
            "IntEconomyLimit": 23,
            "IntBusinessLimit": 32,
            "WeightSystemDomEconomyFee": 5,
            "WeightSystemDomBusinessFee": 7,
            "WeightSystemIntEconomyFee": 15,
            "WeightSystemIntBusinessFee": 20,
            "PieceSystemIntEconomyFee": 50,
            "PieceSystemIntBusinessFee": 80,
            "currency": "TL",
            "InternationalCurrency": "$",
        },
        "lufthansa": {
            "DomesticFlights": False,
            "FirstClass": True,
            "DomCountry": "none",
            "IntEconomyLimit": 23,
            "IntBusinessLimit": 32,
            "IntFirstLimit": 0,
            "WeightSystemIntEconomyFee": 12.5,
            "PieceSystemIntEconomyFee": 70,
            "InternationalCurrency": "€",
        },
    }


@pytest.fixture
def country_records():
    """Сырые документы стран (включая legacy-флаг WeightSystem)."""
    return {
        "turkey": {"name": "Turkey", "usesPieceSystem": False},
        "germany": {"name": "Germany", "WeightSystem": True},
        "united-states": {"name": "United States", "usesPieceSystem": True},
        "canada": {"usesPieceSystem": True},
    }


@pytest.fixture
def reference_store(airline_records, country_records):
    return InMemoryReferenceStore.from_records(airline_records, country_records)


@pytest.fixture
def turkish(reference_store):
    return reference_store.get_airline("turkish")


@pytest.fixture
def lufthansa(reference_store):
    return reference_store.get_airline("lufthansa")


@pytest.fixture
def turkey(reference_store):
    return reference_store.get_country("turkey")


@pytest.fixture
def germany(reference_store):
    return reference_store.get_country("germany")


@pytest.fixture
def united_states(reference_store):
    return reference_store.get_country("united-states")


@pytest.fixture
def domestic_selection():
    """Внутренний рейс Turkish, эконом."""
    return Selection(
        airline_id="turkish",
        class_type=ClassType.ECONOMY,
        flight_type=FlightType.DOMESTIC,
        trip_direction=TripDirection.OUTBOUND,
        origin_country_id="turkey",
        destination_country_id="turkey",
    )


# =============================================================================
# HISTORY
# =============================================================================


BASE_TIME = datetime(2025, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def make_record(
    total_weight: float,
    minutes: int = 0,
    trip_type: TripDirection = TripDirection.OUTBOUND,
    limit_passed: bool = False,
    airline: str = "turkish",
    class_type: ClassType = ClassType.ECONOMY,
    flight_type: FlightType = FlightType.INTERNATIONAL,
    system: AccountingSystem = AccountingSystem.WEIGHT,
    origin: str = "Turkey",
    destination: str = "Germany",
) -> HistoryRecord:
    """Запись журнала; minutes — смещение от BASE_TIME (больше = новее)."""
    return HistoryRecord(
        total_weight=total_weight,
        limit_passed=limit_passed,
        flight_type=flight_type,
        trip_type=trip_type,
        class_type=class_type,
        airline=airline,
        origin=origin,
        destination=destination,
        system=system,
        calculated_at=BASE_TIME + timedelta(minutes=minutes),
        items_used=(ItemUsed(name="Laptop", count=1, weight=2.0),),
    )
