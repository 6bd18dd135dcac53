"""
Input Coercion

Single parse-or-default rule shared by every calculator: blank, malformed
or non-finite input becomes the default (0) instead of raising.
"""

import logging
import math
from typing import Any

logger = logging.getLogger(__name__)

_CURRENCY_PREFIXES = ("¥", "￥", "$")


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Parse a raw form value into a finite float.

    Accepts ints, floats and numeric strings. Strings may carry surrounding
    whitespace, ``,`` thousands separators, a leading currency sign and a
    trailing ``%``.

    Args:
        value: Raw value from the presentation layer
        default: Value returned when parsing fails

    Returns:
        Parsed float, or ``default`` for blank/non-numeric/NaN/infinite input
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.startswith(_CURRENCY_PREFIXES):
            text = text[1:].lstrip()
        if text.endswith("%"):
            text = text[:-1].rstrip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            logger.debug(f"Coercing non-numeric input {value!r} to {default}")
            return default
    else:
        logger.debug(f"Coercing unsupported input type {type(value).__name__} to {default}")
        return default

    if not math.isfinite(number):
        return default
    return number


def non_negative(value: Any) -> float:
    """Parse a value and clamp it to zero or above."""
    return max(0.0, parse_number(value))


def finite_or_zero(value: float) -> float:
    """Replace an overflowed (infinite or NaN) result with 0."""
    if not math.isfinite(value):
        return 0.0
    return value


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is zero or the quotient overflows."""
    if denominator == 0:
        return 0.0
    return finite_or_zero(numerator / denominator)
