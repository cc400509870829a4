"""
JSON Schema Contract Validators

Модуль для валидации записей, которыми движок обменивается с внешними
хранилищами, согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (src/core/contracts/schema/):
- airline_record.json (авиакомпания, потребляется)
- country_record.json (страна, потребляется)
- catalog_item.json (предмет каталога, потребляется)
- calculation_log.json (запись журнала расчётов, производится)
- item_usage.json (счётчик использования предмета, производится)
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema
from jsonschema import Draft202012Validator

from src.core.errors import ContractViolationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом (schema/ рядом с этим модулем).
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'airline_record')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема сама по себе невалидна
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    contract: имя контракта в ContractViolationError ("airline",
    "calculation_log", ...), schema_name: файл схемы.
    """

    contract: str = ""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Валидация данных против схемы (первая найденная ошибка).

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(dict(data))

    def check(self, data: Mapping[str, Any], record_id: str) -> None:
        """
        Проверка записи с перечислением всех нарушений.

        Args:
            data: Сырая запись
            record_id: Идентификатор записи (для сообщения)

        Raises:
            ContractViolationError: Если запись нарушает хотя бы одно правило схемы
        """
        errors = sorted(self.validator.iter_errors(dict(data)), key=lambda e: e.json_path)
        if errors:
            reason = "; ".join(f"{e.json_path}: {e.message}" for e in errors)
            raise ContractViolationError(self.contract or self.schema_name, record_id, reason)


class AirlineRecordValidator(ContractValidator):
    contract = "airline"

    def __init__(self):
        super().__init__("airline_record")


class CountryRecordValidator(ContractValidator):
    contract = "country"

    def __init__(self):
        super().__init__("country_record")


class CatalogItemValidator(ContractValidator):
    contract = "catalog_item"

    def __init__(self):
        super().__init__("catalog_item")


class CalculationLogValidator(ContractValidator):
    """
    Валидатор записи журнала расчётов.

    Запись неизменяема после создания, поэтому проверяется один раз при экспорте.
    """

    contract = "calculation_log"

    def __init__(self):
        super().__init__("calculation_log")


class ItemUsageValidator(ContractValidator):
    contract = "item_usage"

    def __init__(self):
        super().__init__("item_usage")
