"""
Тесты для рейтинга частоты нарушений и последних нарушений

Лимиты и тарифы берутся из текущего справочника, а не из журнала.
"""

import pytest

from src.analytics import recent_violations, violation_frequency_ranking
from src.core.domain import AccountingSystem, ClassType, FlightType
from src.reference import InMemoryReferenceStore
from tests.conftest import make_record

INTERNATIONAL = FlightType.INTERNATIONAL
DOMESTIC = FlightType.DOMESTIC


# =============================================================================
# FREQUENCY RANKING
# =============================================================================


class TestViolationFrequencyRanking:
    @pytest.fixture
    def records(self):
        return [
            make_record(25.0, 0, limit_passed=True),
            make_record(26.0, 1, limit_passed=True, system=AccountingSystem.PIECE),
            make_record(35.0, 2, limit_passed=True, class_type=ClassType.BUSINESS),
            make_record(30.0, 3, limit_passed=True, airline="lufthansa"),
            make_record(31.0, 4, limit_passed=True, airline="lufthansa"),
            make_record(29.0, 5, limit_passed=True, airline="lufthansa"),
            make_record(10.0, 6, limit_passed=False),
        ]

    def test_sorted_by_count(self, records, reference_store):
        ranking = violation_frequency_ranking(records, reference_store)

        assert [(g.airline_id, g.class_type, g.count) for g in ranking] == [
            ("lufthansa", ClassType.ECONOMY, 3),
            ("turkish", ClassType.ECONOMY, 2),
            ("turkish", ClassType.BUSINESS, 1),
        ]

    def test_latest_values(self, records, reference_store):
        """Система и вес берутся из самого свежего нарушения группы."""
        turkish_economy = violation_frequency_ranking(records, reference_store)[1]
        assert turkish_economy.system == AccountingSystem.PIECE
        assert turkish_economy.latest_total_weight == 26.0

    def test_limit_resolved_fresh(self, records, airline_records, country_records):
        """Изменение лимита в справочнике отражается в рейтинге."""
        airline_records["turkish"]["IntEconomyLimit"] = 25
        store = InMemoryReferenceStore.from_records(airline_records, country_records)

        ranking = violation_frequency_ranking(records, store)
        assert ranking[1].weight_limit == 25.0
        assert ranking[2].weight_limit == 32.0

    def test_missing_airline(self, reference_store):
        records = [make_record(30.0, 0, limit_passed=True, airline="ghost-air")]
        (group,) = violation_frequency_ranking(records, reference_store)
        assert group.weight_limit is None

    def test_no_longer_offered(self, reference_store):
        records = [
            make_record(30.0, 0, limit_passed=True, airline="lufthansa", class_type=ClassType.FIRST)
        ]
        (group,) = violation_frequency_ranking(records, reference_store)
        assert group.weight_limit is None

    def test_limit(self, records, reference_store):
        assert len(violation_frequency_ranking(records, reference_store, limit=2)) == 2

    def test_no_violations(self, reference_store):
        assert violation_frequency_ranking([make_record(1.0)], reference_store) == []


# =============================================================================
# RECENT VIOLATIONS
# =============================================================================


class TestRecentViolations:
    def test_weight_fee_requoted(self, reference_store):
        """25.3 кг, лимит 23, 15$/кг (international) → 3 единицы = 45."""
        (violation,) = recent_violations(
            [make_record(25.3, 0, limit_passed=True)], reference_store
        )

        assert violation.airline_name == "Turkish Airlines"
        assert violation.weight_limit == 23.0
        assert violation.excess_weight == pytest.approx(2.3)
        assert violation.unit_fee == 15.0
        assert violation.currency == "$"
        assert violation.total_fee == 45.0

    def test_domestic_currency(self, reference_store):
        records = [make_record(25.0, 0, limit_passed=True, flight_type=DOMESTIC)]
        (violation,) = recent_violations(records, reference_store)
        assert violation.currency == "TL"
        assert violation.total_fee == 10.0

    def test_piece_flat_fee(self, reference_store):
        records = [make_record(40.0, 0, limit_passed=True, system=AccountingSystem.PIECE)]
        (violation,) = recent_violations(records, reference_store)
        assert violation.total_fee == 50.0
        assert violation.currency == "$"

    def test_missing_rate(self, reference_store):
        records = [
            make_record(40.0, 0, limit_passed=True, airline="lufthansa", class_type=ClassType.BUSINESS)
        ]
        (violation,) = recent_violations(records, reference_store)
        assert violation.unit_fee is None
        assert violation.total_fee is None

    def test_raised_limit_means_no_fee(self, airline_records, country_records):
        airline_records["turkish"]["IntEconomyLimit"] = 30
        store = InMemoryReferenceStore.from_records(airline_records, country_records)
        (violation,) = recent_violations([make_record(25.0, 0, limit_passed=True)], store)
        assert violation.excess_weight == 0.0
        assert violation.total_fee == 0.0

    def test_newest_first_and_limit(self, reference_store):
        records = [make_record(24.0 + i, i, limit_passed=True) for i in range(20)]
        records.append(make_record(5.0, 30, limit_passed=False))
        result = recent_violations(records, reference_store)

        assert len(result) == 15
        assert result[0].total_weight == 43.0
        assert all(v.total_weight > 23.0 for v in result)

    def test_unknown_airline_skipped(self, reference_store):
        records = [
            make_record(30.0, 0, limit_passed=True, airline="ghost-air"),
            make_record(30.0, 1, limit_passed=True),
        ]
        result = recent_violations(records, reference_store)
        assert [v.airline_id for v in result] == ["turkish"]
