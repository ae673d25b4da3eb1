"""Equality algorithms shared by the whole model.

Four total functions are provided. None of them raise: values that cannot be
compared are simply unequal.

- ``loose_equality``: Python value equality with number/string/boolean coercion.
- ``strict_equality``: same kind required, primitives by value, objects by identity.
- ``same_value``: strict equality where NaN equals NaN and 0.0 differs from -0.0.
- ``same_value_zero``: same value where 0.0 equals -0.0.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable
from typing import Any

EqualityFunction = Callable[[Any, Any], bool]

# Literal float spellings accepted when a string is coerced to a number
_FLOAT_WORDS: dict[str, float] = {
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}


def runtime_kind(value: Any) -> str:
    """Classify a value the way the equality algorithms compare it.

    Args:
        value: Any value.

    Returns:
        One of "nullish", "boolean", "number", "string", "bytes",
        "function" or "object".
    """
    if value is None:
        return "nullish"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if callable(value):
        return "function"
    return "object"


_VALUE_KINDS = frozenset({"boolean", "number", "string", "bytes"})


def _is_nan(value: Any) -> bool:
    try:
        return value != value
    except Exception:
        return False


def _is_negative_zero(value: Any) -> bool:
    return isinstance(value, float) and value == 0.0 and math.copysign(1.0, value) < 0


def _to_number(value: Any) -> Any:
    """Coerce a boolean or string to a number, NaN when impossible."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if text in _FLOAT_WORDS:
            return _FLOAT_WORDS[text]
        try:
            return int(text)
        except ValueError:
            pass
        if text.lower().lstrip("+-") in ("inf", "infinity", "nan"):
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return value


def strict_equality(compared: Any, comparee: Any) -> bool:
    """Strict equality without coercion.

    Args:
        compared: The compared value.
        comparee: The value compared to.

    Returns:
        True if both values are of the same kind and, for booleans, numbers,
        strings and bytes, equal by value; for other values, identical.
    """
    kind = runtime_kind(compared)
    if kind != runtime_kind(comparee):
        return False
    if kind == "nullish":
        return True
    if kind in _VALUE_KINDS:
        try:
            return bool(compared == comparee)
        except Exception:
            return False
    return compared is comparee


def loose_equality(compared: Any, comparee: Any) -> bool:
    """Coercive equality.

    Numbers, numeric strings and booleans are coerced to numbers before
    comparing; other values use Python's ``==``. ``None`` only equals ``None``.

    Args:
        compared: The compared value.
        comparee: The value compared to.

    Returns:
        True if the values are equal after coercion.
    """
    if compared is None or comparee is None:
        return compared is None and comparee is None
    compared_kind = runtime_kind(compared)
    comparee_kind = runtime_kind(comparee)
    if compared_kind != comparee_kind and {compared_kind, comparee_kind} <= {
        "boolean",
        "number",
        "string",
    }:
        compared, comparee = _to_number(compared), _to_number(comparee)
    try:
        return bool(compared == comparee)
    except Exception:
        return False


def same_value(compared: Any, comparee: Any) -> bool:
    """The same value algorithm.

    Args:
        compared: The compared value.
        comparee: The value compared with.

    Returns:
        True if the values are the same, with NaN equal to NaN and
        0.0 and -0.0 handled as different numbers.
    """
    kind = runtime_kind(compared)
    if kind != runtime_kind(comparee):
        return False
    if kind == "number":
        if _is_nan(compared) or _is_nan(comparee):
            return _is_nan(compared) and _is_nan(comparee)
        if compared == 0 and comparee == 0:
            return _is_negative_zero(compared) == _is_negative_zero(comparee)
    return strict_equality(compared, comparee)


def same_value_zero(compared: Any, comparee: Any) -> bool:
    """The same value zero algorithm.

    Args:
        compared: The compared value.
        comparee: The value compared with.

    Returns:
        True if the values are the same, with NaN equal to NaN and
        0.0 and -0.0 handled as the same number.
    """
    kind = runtime_kind(compared)
    if kind != runtime_kind(comparee):
        return False
    if kind == "number" and (_is_nan(compared) or _is_nan(comparee)):
        return _is_nan(compared) and _is_nan(comparee)
    return strict_equality(compared, comparee)


KNOWN_EQUALITIES: dict[str, EqualityFunction] = {
    "same_value_zero": same_value_zero,
    "same_value": same_value,
    "loose_equality": loose_equality,
    "strict_equality": strict_equality,
}


def equality_name(equality_fn: EqualityFunction) -> str | None:
    """Name of a known equality function, None for custom ones."""
    for name, known in KNOWN_EQUALITIES.items():
        if known is equality_fn:
            return name
    return None
