"""
Errors — Таксономия ошибок расчёта багажа

Все ошибки наследуются от LuggageCalculationError, чтобы вызывающий код
мог прервать один расчёт, не затрагивая состояние сессии.

- IncompleteSelectionError: не заполнены обязательные поля выбора рейса
- EmptySelectionError: нет ни одного предмета с count > 0
- ReferenceDataMissingError: авиакомпания / страна / тариф не найдены
- ContractViolationError: сырая запись не соответствует JSON Schema контракту
- DuplicateLogEntryError: запись журнала с таким ключом уже существует
- AnalyticsCancelledError: обход истории отменён, частичный результат отброшен

"Не предлагается" (NOT_OFFERED) не является ошибкой, это штатное
терминальное состояние композитора.
"""

from typing import Sequence


class LuggageCalculationError(Exception):
    """Базовая ошибка одного расчёта."""


class IncompleteSelectionError(LuggageCalculationError):
    """Не заполнены обязательные поля Selection."""

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = tuple(missing_fields)
        super().__init__(
            "Please fill in information regarding flight and luggage before "
            f"attempting to calculate (missing: {', '.join(self.missing_fields)})."
        )


class EmptySelectionError(LuggageCalculationError):
    """Нет ни одного предмета с положительным count."""

    def __init__(self):
        super().__init__("Please add at least one item before calculating.")


class ReferenceDataMissingError(LuggageCalculationError):
    """
    Справочная запись не найдена.

    Никогда не подменяется значением по умолчанию: нулевой лимит или тариф
    выдал бы реальное нарушение за неограниченную норму.
    """

    def __init__(self, kind: str, record_id: str, detail: str = ""):
        self.kind = kind
        self.record_id = record_id
        message = f"{kind} record not found: {record_id!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ContractViolationError(LuggageCalculationError):
    """Сырая запись не прошла валидацию контракта."""

    def __init__(self, contract: str, record_id: str, reason: str):
        self.contract = contract
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"{contract} record {record_id!r} violates contract: {reason}")


class DuplicateLogEntryError(LuggageCalculationError):
    """Журнал append-only: ключ (timestamp) уже занят."""

    def __init__(self, log_id: str):
        self.log_id = log_id
        super().__init__(f"Calculation log {log_id!r} already exists")


class AnalyticsCancelledError(LuggageCalculationError):
    """Обход истории отменён вызывающей стороной."""

    def __init__(self, processed: int):
        self.processed = processed
        super().__init__(f"Analytics traversal cancelled after {processed} records")
