"""Reference & catalog stores and the boundary adapters for their raw records."""

from .adapters import (
    airline_from_record,
    catalog_item_from_record,
    country_from_record,
    humanize_id,
)
from .store import (
    CatalogStore,
    InMemoryCatalogStore,
    InMemoryReferenceStore,
    ReferenceStore,
)

__all__ = [
    "airline_from_record",
    "catalog_item_from_record",
    "country_from_record",
    "humanize_id",
    "ReferenceStore",
    "InMemoryReferenceStore",
    "CatalogStore",
    "InMemoryCatalogStore",
]
