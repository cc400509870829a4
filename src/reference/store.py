"""
Stores — интерфейсы справочника и каталога + in-memory реализации

Технология хранения вне зоны ответственности движка: ему нужны только
контракты get_airline / get_country / get_item. In-memory реализации
нормализуют сырые записи при загрузке (на границе) и используются как
эталон контракта и в тестах.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional

from src.core.domain.items import CatalogItem, SelectedItem
from src.core.domain.reference import Airline, Country
from src.core.errors import ReferenceDataMissingError
from src.reference.adapters import (
    DEFAULT_CURRENCY,
    airline_from_record,
    catalog_item_from_record,
    country_from_record,
)


# =============================================================================
# REFERENCE STORE
# =============================================================================


class ReferenceStore(ABC):
    """Источник стран и авиакомпаний."""

    @abstractmethod
    def find_airline(self, airline_id: str) -> Optional[Airline]:
        """Авиакомпания или None."""

    @abstractmethod
    def find_country(self, country_id: str) -> Optional[Country]:
        """Страна или None."""

    def get_airline(self, airline_id: str) -> Airline:
        """
        Авиакомпания по идентификатору.

        Raises:
            ReferenceDataMissingError: Если записи нет
        """
        airline = self.find_airline(airline_id)
        if airline is None:
            raise ReferenceDataMissingError("Airline", airline_id)
        return airline

    def get_country(self, country_id: str) -> Country:
        """
        Страна по идентификатору.

        Raises:
            ReferenceDataMissingError: Если записи нет
        """
        country = self.find_country(country_id)
        if country is None:
            raise ReferenceDataMissingError("Country", country_id)
        return country


class InMemoryReferenceStore(ReferenceStore):
    """Справочник в памяти."""

    def __init__(
        self,
        airlines: Iterable[Airline] = (),
        countries: Iterable[Country] = (),
    ):
        self._airlines = {airline.id: airline for airline in airlines}
        self._countries = {country.id: country for country in countries}

    @classmethod
    def from_records(
        cls,
        airline_records: Mapping[str, Mapping[str, Any]],
        country_records: Mapping[str, Mapping[str, Any]],
        default_currency: str = DEFAULT_CURRENCY,
    ) -> "InMemoryReferenceStore":
        """
        Загрузка из сырых документов (ключ — идентификатор документа).

        Raises:
            ContractViolationError: Если хотя бы одна запись не проходит контракт
        """
        return cls(
            airlines=[
                airline_from_record(airline_id, raw, default_currency)
                for airline_id, raw in airline_records.items()
            ],
            countries=[
                country_from_record(country_id, raw)
                for country_id, raw in country_records.items()
            ],
        )

    def find_airline(self, airline_id: str) -> Optional[Airline]:
        return self._airlines.get(airline_id)

    def find_country(self, country_id: str) -> Optional[Country]:
        return self._countries.get(country_id)

    def airlines(self) -> list[Airline]:
        return sorted(self._airlines.values(), key=lambda a: a.name)

    def countries(self) -> list[Country]:
        return sorted(self._countries.values(), key=lambda c: c.name)


# =============================================================================
# CATALOG STORE
# =============================================================================


class CatalogStore(ABC):
    """Источник предметов каталога."""

    @abstractmethod
    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        """Предмет или None."""

    @abstractmethod
    def items(self) -> list[CatalogItem]:
        """Все предметы каталога."""

    def get_item(self, item_id: str) -> CatalogItem:
        """
        Предмет по идентификатору.

        Raises:
            ReferenceDataMissingError: Если предмета нет
        """
        item = self.find_item(item_id)
        if item is None:
            raise ReferenceDataMissingError("CatalogItem", item_id)
        return item

    def items_by_category(self) -> dict[str, list[CatalogItem]]:
        """Предметы, сгруппированные по категории (для вкладок UI)."""
        grouped: dict[str, list[CatalogItem]] = {}
        for item in self.items():
            grouped.setdefault(item.category, []).append(item)
        return grouped

    def select(self, counts: Mapping[str, int]) -> list[SelectedItem]:
        """
        Выбранные предметы из счётчиков пользователя.

        Args:
            counts: item_id → количество (нулевые допускаются и сохраняются)

        Raises:
            ReferenceDataMissingError: Если item_id нет в каталоге
        """
        return [self.get_item(item_id).select(count) for item_id, count in counts.items()]


class InMemoryCatalogStore(CatalogStore):
    """Каталог в памяти."""

    def __init__(self, items: Iterable[CatalogItem] = ()):
        self._items = {item.id: item for item in items}

    @classmethod
    def from_records(cls, item_records: Mapping[str, Mapping[str, Any]]) -> "InMemoryCatalogStore":
        """
        Raises:
            ContractViolationError: Если хотя бы одна запись не проходит контракт
        """
        return cls(
            catalog_item_from_record(item_id, raw) for item_id, raw in item_records.items()
        )

    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        return self._items.get(item_id)

    def items(self) -> list[CatalogItem]:
        return sorted(self._items.values(), key=lambda i: (i.category, i.name))
