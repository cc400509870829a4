"""
Contract Validation Module

Модуль для валидации JSON контрактов записей, которыми движок обменивается
с каталогом, справочником и журналом расчётов.
"""

from .validators import (
    AirlineRecordValidator,
    CalculationLogValidator,
    CatalogItemValidator,
    ContractValidator,
    CountryRecordValidator,
    ItemUsageValidator,
    SchemaLoader,
)

__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "AirlineRecordValidator",
    "CountryRecordValidator",
    "CatalogItemValidator",
    "CalculationLogValidator",
    "ItemUsageValidator",
]
