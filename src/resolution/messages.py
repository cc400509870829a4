"""
Messages — тексты для пользователя

Все строки, которые движок возвращает в UI, собраны здесь, чтобы формулировки
результата, сбора и отказа не расходились между расчётом и историей.
"""

from typing import Sequence

from src.core.domain.flight import ClassType, FlightType
from src.core.math.numerical_safeguards import format_amount, format_weight


NO_FINE_MESSAGE = "You do not pay a fine since you did not exceed any policies. Good job!"

PIECE_SYSTEM_EXPLANATION = (
    "the piece system instead of the weight system, which charges for each piece "
    "of overweight luggage instead of per kilogram."
)


def weight_summary(total_weight: float, weight_limit: float, limit_exceeded: bool) -> str:
    """
    Сводка по весу: суммарный вес и расстояние до лимита.

    Examples:
        >>> weight_summary(2.2, 23.0, False)
        'Your total weight is 2.2 kilograms. You are 20.8 kilograms away from passing the airline policy.'
    """
    difference = format_weight(abs(total_weight - weight_limit))
    total = format_weight(total_weight)
    if limit_exceeded:
        return (
            f"Your total weight is {total} kilograms. "
            f"You exceed the airline policy by {difference} kilograms."
        )
    return (
        f"Your total weight is {total} kilograms. "
        f"You are {difference} kilograms away from passing the airline policy."
    )


def weight_fee_detail(unit_fee: float, total_fee: float, currency: str) -> str:
    return (
        f"According to the airline policy, you have to pay {format_amount(unit_fee)}{currency} "
        f"per kilogram. Which amounts to a total of {format_amount(total_fee)}{currency}."
    )


def piece_fee_detail(unit_fee: float, currency: str) -> str:
    return (
        f"According to the airline policy, you have to pay {format_amount(unit_fee)}{currency} "
        "for a piece of extra luggage for your excess weight."
    )


def not_offered(airline_name: str, class_type: ClassType, flight_type: FlightType) -> str:
    """Конкретный отказ: авиакомпания не продаёт класс для типа рейса."""
    return (
        f"{airline_name} does not offer {class_type.value} class for {flight_type.value} "
        "flights. Please select a different class or flight type."
    )


def piece_system_notice(country_names: Sequence[str]) -> str:
    """
    Уведомление о piece-системе для одной или двух стран.

    Returns:
        Пустая строка, если ни одна страна не использует piece-систему
    """
    if not country_names:
        return ""
    if len(country_names) == 1:
        return f"{country_names[0]} uses {PIECE_SYSTEM_EXPLANATION}"
    return f"{' and '.join(country_names)} use {PIECE_SYSTEM_EXPLANATION}"
