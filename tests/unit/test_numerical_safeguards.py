"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf проверки
2. Epsilon-сравнения и строгое превышение порога
3. Округление вверх с толерантностью к шуму float и округление половины от нуля
4. Форматирование сумм и весов
5. Валидацию параметров
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    EPS_WEIGHT_KG,
    ceil_with_tolerance,
    exceeds,
    format_amount,
    format_weight,
    round_half_up,
    is_close,
    is_valid_float,
    validate_non_negative,
)


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


class TestIsValidFloat:
    def test_finite_values(self):
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(1e300)

    def test_nan_inf(self):
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


class TestIsClose:
    def test_summation_noise(self):
        """0.1 + 0.2 равно 0.3 в пределах толерантности."""
        assert is_close(0.1 + 0.2, 0.3)

    def test_different_values(self):
        assert not is_close(23.0, 23.1)

    def test_nan_never_close(self):
        assert not is_close(float("nan"), float("nan"))


class TestExceeds:
    def test_clear_violation(self):
        assert exceeds(23.1, 23.0)

    def test_equal_is_not_violation(self):
        """Вес ровно на лимите — не нарушение."""
        assert not exceeds(23.0, 23.0)

    def test_noise_is_not_violation(self):
        """Шум суммирования не превращается в нарушение."""
        assert not exceeds(23.000000000000004, 23.0)

    def test_below_limit(self):
        assert not exceeds(2.2, 23.0)

    def test_violation_always_bills_at_least_one_unit(self):
        """Если exceeds() истинно, ceil превышения >= 1 (одна толерантность)."""
        for value in (23.0 + 2 * EPS_WEIGHT_KG, 23.001, 23.1, 23.5):
            assert exceeds(value, 23.0)
            assert ceil_with_tolerance(value - 23.0) >= 1


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


class TestCeilWithTolerance:
    def test_partial_kilogram_rounds_up(self):
        """Частичный килограмм округляется вверх: 1.3 → 2, 0.1 → 1."""
        assert ceil_with_tolerance(1.3) == 2
        assert ceil_with_tolerance(0.1) == 1

    def test_whole_values_unchanged(self):
        assert ceil_with_tolerance(2.0) == 2
        assert ceil_with_tolerance(0.0) == 0

    def test_noise_above_integer_absorbed(self):
        """25.3 - 23.3 = 2.0000000000000036 → 2, а не 3."""
        assert ceil_with_tolerance(25.3 - 23.3) == 2

    def test_noise_below_integer_absorbed(self):
        assert ceil_with_tolerance(2.9999999999999996) == 3

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN/Inf"):
            ceil_with_tolerance(float("nan"))

    def test_inf_rejected(self):
        with pytest.raises(ValueError):
            ceil_with_tolerance(math.inf)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class TestFormatting:
    def test_format_amount_integer(self):
        assert format_amount(10.0) == "10"
        assert format_amount(50) == "50"

    def test_format_amount_fraction(self):
        assert format_amount(12.5) == "12.5"
        assert format_amount(12.25) == "12.25"

    def test_format_weight_one_decimal(self):
        assert format_weight(2.2) == "2.2"
        assert format_weight(20.8) == "20.8"
        assert format_weight(25.0) == "25.0"

    def test_format_weight_rounds_noise(self):
        assert format_weight(23.0 - 2.2) == "20.8"

    def test_format_weight_tie_rounds_up(self):
        """2.25 кг показывается как 2.3, а не 2.2."""
        assert format_weight(2.25) == "2.3"
        assert format_weight(0.25) == "0.3"
        assert format_weight(18.75) == "18.8"

    def test_format_weight_uses_binary_value(self):
        """1.15 хранится как 1.1499..., поэтому показывается 1.1."""
        assert format_weight(1.15) == "1.1"


class TestRoundHalfUp:
    def test_tie_rounds_away_from_zero(self):
        assert round_half_up(2.25) == 2.3
        assert round_half_up(18.25) == 18.3
        assert round_half_up(-2.25) == -2.3

    def test_digits(self):
        assert round_half_up(12.345, 0) == 12.0
        assert round_half_up(12.5, 0) == 13.0
        assert round_half_up(0.125, 2) == 0.13

    def test_non_tie_unchanged(self):
        assert round_half_up(20.84) == 20.8
        assert round_half_up(25.0) == 25.0

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN/Inf"):
            round_half_up(float("nan"))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestValidateNonNegative:
    def test_accepts_zero_and_positive(self):
        validate_non_negative(0.0, "x")
        validate_non_negative(23.0, "x")

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="weight must be non-negative"):
            validate_non_negative(-0.1, "weight")

    def test_rejects_nan(self):
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_non_negative(float("nan"), "weight")
