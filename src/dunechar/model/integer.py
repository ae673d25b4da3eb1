"""Safe integer gatekeepers.

A safe integer is an integer whose magnitude does not exceed ``2**53 - 1``,
the largest integer a JSON consumer with double precision numbers keeps
exactly. Values are accepted as ints, integral floats or numeric strings.
"""

from __future__ import annotations

import math
from typing import Any

from dunechar.errors import CharacterAssertionError, IntegerConversionError

MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER


def is_safe_int(value: int) -> bool:
    """Check that an int lies within the safe integer range."""
    return MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def _as_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return None
    return None


def is_integer(value: Any) -> bool:
    """Test whether a value denotes a safe integer.

    Args:
        value: The tested value.

    Returns:
        True if value is an int, an integral float or a numeric string within
        the safe integer range. Booleans are not integers.
    """
    number = _as_number(value)
    if number is None:
        return False
    if isinstance(number, float):
        if not math.isfinite(number) or not number.is_integer():
            return False
        number = int(number)
    return is_safe_int(number)


def to_integer(value: Any) -> int:
    """Convert a value to a safe integer.

    Args:
        value: The converted value.

    Returns:
        The integer.

    Raises:
        IntegerConversionError: The value is not a safe integer.
    """
    if not is_integer(value):
        raise IntegerConversionError(f"The value {value!r} is not a safe integer")
    return int(_as_number(value))


def assert_integer(value: Any) -> None:
    """Assert that a value is a safe integer.

    Raises:
        CharacterAssertionError: The value is not a safe integer.
    """
    if not is_integer(value):
        raise CharacterAssertionError(f"Cannot convert {value!r} to a safe integer")
