"""
Domain models and value objects.

Contains the engine's entities: Selection, catalog items, airlines and
countries, calculation outcomes and history records.
"""

from src.core.domain.flight import (
    AccountingSystem,
    ClassType,
    FlightType,
    Selection,
    TripDirection,
)
from src.core.domain.history import HistoryRecord, ItemUsageCounter, ItemUsed, bump_usage
from src.core.domain.items import CatalogItem, SelectedItem
from src.core.domain.outcome import CalculationOutcome, OutcomeState
from src.core.domain.reference import Airline, Country, FareKey

__all__ = [
    # Flight
    "AccountingSystem",
    "ClassType",
    "FlightType",
    "Selection",
    "TripDirection",
    # Items
    "CatalogItem",
    "SelectedItem",
    # Reference
    "Airline",
    "Country",
    "FareKey",
    # Outcome
    "CalculationOutcome",
    "OutcomeState",
    # History
    "HistoryRecord",
    "ItemUsageCounter",
    "ItemUsed",
    "bump_usage",
]
