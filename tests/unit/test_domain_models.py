"""
Тесты для доменных моделей: Selection, предметы, справочник, результат, история

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Immutability (frozen=True)
3. Двумерные таблицы лимитов и тарифов Airline
4. Согласованность CalculationOutcome
5. Сериализацию журнала в формат документной БД
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.core.domain import (
    AccountingSystem,
    Airline,
    CalculationOutcome,
    CatalogItem,
    ClassType,
    Country,
    FlightType,
    HistoryRecord,
    ItemUsageCounter,
    OutcomeState,
    SelectedItem,
    Selection,
    TripDirection,
    bump_usage,
)
from tests.conftest import make_record


# =============================================================================
# SELECTION
# =============================================================================


class TestSelection:
    def test_empty_selection_lists_all_fields(self):
        selection = Selection()
        assert selection.missing_fields() == [
            "airline_id",
            "class_type",
            "flight_type",
            "trip_direction",
            "origin_country_id",
            "destination_country_id",
        ]
        assert not selection.is_complete()

    def test_blank_id_is_missing(self):
        """Пустая строка из UI — поле не выбрано."""
        selection = Selection(
            airline_id="  ",
            class_type=ClassType.ECONOMY,
            flight_type=FlightType.DOMESTIC,
            trip_direction=TripDirection.INBOUND,
            origin_country_id="turkey",
            destination_country_id="turkey",
        )
        assert selection.missing_fields() == ["airline_id"]

    def test_complete(self, domestic_selection):
        assert domestic_selection.is_complete()
        assert domestic_selection.missing_fields() == []

    def test_enum_from_string(self):
        selection = Selection(class_type="business", flight_type="international")
        assert selection.class_type == ClassType.BUSINESS
        assert selection.flight_type == FlightType.INTERNATIONAL

    def test_frozen(self, domestic_selection):
        with pytest.raises(ValidationError):
            domestic_selection.airline_id = "lufthansa"


# =============================================================================
# ITEMS
# =============================================================================


class TestItems:
    def test_catalog_item_select(self):
        item = CatalogItem(id="laptop", name="Laptop", weight=2.0, category="Electronics")
        selected = item.select(3)
        assert selected == SelectedItem(item_id="laptop", name="Laptop", unit_weight=2.0, count=3)
        assert selected.total_weight() == 6.0

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            CatalogItem(id="x", name="X", weight=-1.0, category="Misc")

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            SelectedItem(item_id="x", name="X", unit_weight=1.0, count=-1)

    def test_nan_weight_rejected(self):
        with pytest.raises(ValidationError):
            SelectedItem(item_id="x", name="X", unit_weight=float("nan"), count=1)


# =============================================================================
# REFERENCE
# =============================================================================


class TestCountry:
    def test_strict_bool(self):
        """Флаг piece-системы только строгий bool (нормализация на границе)."""
        with pytest.raises(ValidationError):
            Country(id="x", name="X", uses_piece_system="yes")

    def test_valid(self):
        country = Country(id="japan", name="Japan", uses_piece_system=True)
        assert country.uses_piece_system is True


class TestAirline:
    @pytest.fixture
    def airline(self) -> Airline:
        return Airline(
            id="acme",
            name="Acme Air",
            supports_domestic_flights=True,
            supports_first_class=False,
            limits={
                (ClassType.ECONOMY, FlightType.DOMESTIC): 23.0,
                (ClassType.FIRST, FlightType.INTERNATIONAL): 0.0,
            },
            weight_system_fees={(ClassType.ECONOMY, FlightType.DOMESTIC): 5.0},
            piece_system_fees={ClassType.ECONOMY: 50.0},
            domestic_currency="TL",
            international_currency="$",
        )

    def test_limit_lookup(self, airline):
        assert airline.limit_for(ClassType.ECONOMY, FlightType.DOMESTIC) == 23.0

    def test_absent_limit_is_none(self, airline):
        assert airline.limit_for(ClassType.BUSINESS, FlightType.DOMESTIC) is None

    def test_zero_limit_is_none(self, airline):
        """Лимит 0 означает, что комбинация не продаётся."""
        assert airline.limit_for(ClassType.FIRST, FlightType.INTERNATIONAL) is None

    def test_fee_lookups(self, airline):
        assert airline.weight_fee_for(ClassType.ECONOMY, FlightType.DOMESTIC) == 5.0
        assert airline.weight_fee_for(ClassType.ECONOMY, FlightType.INTERNATIONAL) is None
        assert airline.piece_fee_for(ClassType.ECONOMY) == 50.0
        assert airline.piece_fee_for(ClassType.FIRST) is None

    def test_currency_by_flight_type(self, airline):
        assert airline.currency_for(FlightType.DOMESTIC) == "TL"
        assert airline.currency_for(FlightType.INTERNATIONAL) == "$"

    def test_capabilities(self, airline):
        assert airline.offered_classes() == [ClassType.ECONOMY, ClassType.BUSINESS]
        assert airline.offered_flight_types() == [FlightType.DOMESTIC, FlightType.INTERNATIONAL]

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            Airline(
                id="bad",
                name="Bad",
                weight_system_fees={(ClassType.ECONOMY, FlightType.DOMESTIC): -1.0},
                domestic_currency="$",
                international_currency="$",
            )


# =============================================================================
# OUTCOME
# =============================================================================


class TestCalculationOutcome:
    def _outcome(self, **overrides) -> CalculationOutcome:
        data = dict(
            total_weight=25.0,
            weight_limit=23.0,
            limit_exceeded=True,
            excess_weight=2.0,
            accounting_system=AccountingSystem.WEIGHT,
            billable_units=2,
            unit_fee=5.0,
            fee=10.0,
            currency="TL",
            weight_message="Your total weight is 25.0 kilograms.",
            fee_detail_message="fee",
        )
        data.update(overrides)
        return CalculationOutcome(**data)

    def test_violation_state(self):
        assert self._outcome().state == OutcomeState.VIOLATION

    def test_no_violation_state(self):
        outcome = self._outcome(
            total_weight=2.2, limit_exceeded=False, excess_weight=0.0,
            billable_units=0, unit_fee=0.0, fee=0.0,
        )
        assert outcome.state == OutcomeState.NO_VIOLATION

    def test_fee_without_violation_rejected(self):
        with pytest.raises(ValidationError, match="fee-free outcome"):
            self._outcome(limit_exceeded=False)

    def test_zero_limit_rejected(self):
        with pytest.raises(ValidationError):
            self._outcome(weight_limit=0.0)


# =============================================================================
# HISTORY
# =============================================================================


class TestHistoryRecord:
    def test_log_id_format(self):
        record = make_record(5.0).model_copy(
            update={"calculated_at": datetime(2025, 3, 1, 10, 15, 30, 250_000, tzinfo=timezone.utc)}
        )
        assert record.log_id == "2025-03-01T10-15-30-250Z"

    def test_naive_timestamp_treated_as_utc(self):
        record = HistoryRecord.model_validate(
            {**make_record(5.0).to_record(), "calculatedAt": "2025-03-01T10:00:00"}
        )
        assert record.calculated_at.tzinfo == timezone.utc

    def test_to_record_uses_document_field_names(self):
        data = make_record(12.5, limit_passed=True).to_record()
        assert data["totalWeight"] == 12.5
        assert data["limitPassed"] is True
        assert data["flightType"] == "international"
        assert data["tripType"] == "outbound"
        assert data["classType"] == "economy"
        assert data["system"] == "weight"
        assert data["itemsUsed"] == [{"name": "Laptop", "count": 1, "weight": 2.0}]

    def test_round_trip_from_document(self):
        record = make_record(7.5)
        assert HistoryRecord.model_validate(record.to_record()) == record


class TestItemUsageCounter:
    def test_first_use(self):
        at = datetime(2025, 3, 1, tzinfo=timezone.utc)
        counter = bump_usage(None, "Laptop", 2, at)
        assert counter.times_used == 2
        assert counter.first_time_used == counter.last_time_used == at

    def test_bump_adds_count_and_keeps_first_time(self):
        first = datetime(2025, 3, 1, tzinfo=timezone.utc)
        later = first + timedelta(days=1)
        counter = bump_usage(bump_usage(None, "Laptop", 2, first), "Laptop", 3, later)
        assert counter.times_used == 5
        assert counter.first_time_used == first
        assert counter.last_time_used == later

    def test_negative_bump_rejected(self):
        counter = ItemUsageCounter.first_use("Laptop", 1, datetime(2025, 3, 1))
        with pytest.raises(ValueError):
            counter.bump(-1, datetime(2025, 3, 2))

    def test_to_record_excludes_name(self):
        counter = ItemUsageCounter.first_use("Laptop", 1, datetime(2025, 3, 1, tzinfo=timezone.utc))
        data = counter.to_record()
        assert set(data) == {"Times Used", "First Time Used", "Last Time Used"}
        assert data["Times Used"] == 1
