"""
Core math modules

Численные примитивы с гарантией стабильности для весов и тарифов.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_WEIGHT_KG,
    # NaN/Inf checks
    is_valid_float,
    # Epsilon comparisons
    exceeds,
    is_close,
    # Rounding & formatting
    ceil_with_tolerance,
    round_half_up,
    format_amount,
    format_weight,
    # Validation
    validate_non_negative,
)

__all__ = [
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_WEIGHT_KG",
    "is_valid_float",
    "exceeds",
    "is_close",
    "ceil_with_tolerance",
    "round_half_up",
    "format_amount",
    "format_weight",
    "validate_non_negative",
]
