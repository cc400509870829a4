"""
Numerical Safeguards — безопасные примитивы для весов и тарифов

Модуль обеспечивает численную устойчивость операций движка:
- NaN/Inf проверки для весов и тарифов из внешних записей
- Epsilon-сравнения float с учётом машинной точности
- Округление вверх (ceil) с толерантностью к шуму float
- Округление половины от нуля и форматирование сумм и весов для сообщений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Шум суммирования (0.1 + 0.2 = 0.30000000000000004) не добавляет
   оплачиваемый килограмм
2. Превышение лимита и число оплачиваемых единиц определяются одной и той же
   толерантностью (нарушение никогда не оплачивается нулём единиц)
3. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность для весов (кг)
# Шум суммирования float на порядки меньше, реальные веса на порядки больше
EPS_WEIGHT_KG: Final[float] = 1e-9

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, что значение является конечным float (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом относительной и абсолютной толерантности.

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность
        abs_tol: Абсолютная толерантность

    Returns:
        True если значения равны в пределах толерантности

    Examples:
        >>> is_close(0.1 + 0.2, 0.3)
        True
        >>> is_close(23.0, 23.1)
        False
    """
    if not is_valid_float(a) or not is_valid_float(b):
        return False
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def exceeds(value: float, threshold: float, tol: float = EPS_WEIGHT_KG) -> bool:
    """
    Строгое превышение порога за пределами толерантности.

    Args:
        value: Проверяемое значение (например, суммарный вес)
        threshold: Порог (например, лимит авиакомпании)
        tol: Абсолютная толерантность

    Returns:
        True если value > threshold + tol

    Examples:
        >>> exceeds(23.1, 23.0)
        True
        >>> exceeds(23.000000000000004, 23.0)
        False
    """
    return value - threshold > tol


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def ceil_with_tolerance(value: float, tol: float = EPS_WEIGHT_KG) -> int:
    """
    Округление вверх до целого с поглощением шума float.

    Частичный килограмм всегда округляется в пользу авиакомпании, но
    значение, отличающееся от целого меньше чем на tol, считается целым.

    Args:
        value: Неотрицательное значение
        tol: Абсолютная толерантность

    Returns:
        Наименьшее целое n, такое что n >= value - tol

    Raises:
        ValueError: Если value NaN/Inf

    Examples:
        >>> ceil_with_tolerance(1.3)
        2
        >>> ceil_with_tolerance(2.0000000000000036)
        2
        >>> ceil_with_tolerance(0.1)
        1
    """
    if not is_valid_float(value):
        raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")

    nearest = round(value)
    if abs(value - nearest) <= tol:
        return int(nearest)
    return math.ceil(value)


def _quantize_half_up(value: float, digits: int) -> Decimal:
    if not is_valid_float(value):
        raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")
    # Decimal(float) хранит точное двоичное значение: 1.15 → 1.1499..., 2.25 → 2.25
    return Decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def round_half_up(value: float, digits: int = 1) -> float:
    """
    Округление до digits знаков, половина округляется от нуля
    (в отличие от банковского round(): 2.25 → 2.3, а не 2.2).

    Examples:
        >>> round_half_up(2.25)
        2.3
        >>> round_half_up(18.25)
        18.3
        >>> round_half_up(1.15)
        1.1
    """
    return float(_quantize_half_up(value, digits))


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_amount(value: float) -> str:
    """
    Форматирование суммы без лишних нулей (10.0 → "10", 12.5 → "12.5").

    Args:
        value: Сумма

    Returns:
        Строковое представление (не более двух знаков после точки)
    """
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_weight(value_kg: float) -> str:
    """Вес с одним знаком после точки (для сообщений), 2.25 → "2.3"."""
    return str(_quantize_half_up(value_kg, 1))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
