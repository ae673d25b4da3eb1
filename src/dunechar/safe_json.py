"""JSON encoding that survives values JSON cannot express.

The standard ``json`` module writes NaN and infinities as bare tokens no
strict parser accepts, loses nothing on big integers but hands them to
consumers with double precision numbers, and fails on callables. The safe
codec replaces such values with sentinel strings and restores them when
reading:

- ints beyond the safe integer range: ``"<digits>n"``,
- NaN: ``"[NaN]"``, positive infinity: ``"[+Inf]"``, negative infinity: ``"[-Inf]"``,
- callables: ``null`` inside lists, dropped from objects.

A replacer is a function ``(key, value) -> value`` applied to every value
before encoding, the key being "" for the top value, the dict key for object
members and the int index for list items. A replacer may return ``OMIT`` to
leave the member out. A list of field names can be used instead of a
function; only those keys of every object are kept.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import fields as dataclass_fields
from dataclasses import is_dataclass
from datetime import date, datetime, time
from typing import Any

from dunechar.model.integer import is_safe_int

Key = str | int
JsonReplacerFunction = Callable[[Key, Any], Any]
JsonReplacer = JsonReplacerFunction | list[Key] | None
JsonReviver = Callable[[Key, Any], Any]

NAN_TOKEN = "[NaN]"
POSITIVE_INFINITY_TOKEN = "[+Inf]"
NEGATIVE_INFINITY_TOKEN = "[-Inf]"

BIG_INT_PATTERN = re.compile(r"^(?P<value>[+-]?\d+)n$")

_FLOAT_TOKENS: dict[str, float] = {
    NAN_TOKEN: math.nan,
    POSITIVE_INFINITY_TOKEN: math.inf,
    NEGATIVE_INFINITY_TOKEN: -math.inf,
}


class _Omit:
    def __repr__(self) -> str:
        return "OMIT"


OMIT: Any = _Omit()


def _is_json_key(key: Any) -> bool:
    return isinstance(key, (str, int)) and not isinstance(key, bool)


def create_json_replacer(
    fields: list[Key] | None = None,
    filter: Callable[[Any, Key], bool] | None = None,
    ignore: Callable[[Any, Key], bool] | None = None,
    key_filter: Callable[[Key], bool] | None = None,
    ignore_key: Callable[[Key], bool] | None = None,
    replacer: JsonReplacerFunction | None = None,
) -> JsonReplacer:
    """Create a JSON replacer.

    Filters take precedence over ignores: a value accepted by filter and
    key_filter is never ignored.

    Args:
        fields: Allowed object keys.
        filter: Accepts (value, key) pairs handed to replacer.
        ignore: Selects (value, key) pairs to leave out.
        key_filter: Accepts keys. Defaults to the top value key "" and keys
            loosely equal to one of fields when fields is given, otherwise
            to str and int keys.
        ignore_key: Selects keys to leave out. Defaults to keys rejected
            by key_filter.
        replacer: Transforms accepted values. Defaults to identity.

    Returns:
        The fields list when nothing but fields is given, otherwise a
        replacer function.
    """
    if fields is not None and not (filter or ignore or key_filter or ignore_key or replacer):
        return list(fields)

    if key_filter is None:
        if fields is not None:
            allowed = {str(field) for field in fields}

            def accept_key(key: Key) -> bool:
                return key == "" or str(key) in allowed

        else:
            accept_key = _is_json_key
    else:
        accept_key = key_filter

    def replace(key: Key, value: Any) -> Any:
        if accept_key(key) and filter is not None and filter(value, key):
            return replacer(key, value) if replacer is not None else value
        if (ignore is not None and ignore(value, key)) or (
            ignore_key(key) if ignore_key is not None else not accept_key(key)
        ):
            return OMIT
        return value

    return replace


def _is_list_slot(key: Key) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _safe_filter(value: Any, key: Key) -> bool:
    if value is None or isinstance(value, (str, bool, int, float, date, time)):
        return True
    if isinstance(value, (Mapping, Sequence, set, frozenset)):
        return True
    if is_dataclass(value) and not isinstance(value, type):
        return True
    if callable(getattr(value, "to_json", None)):
        return True
    # Kept as null inside lists so the positions do not shift
    return _is_list_slot(key) and callable(value)


def _safe_ignore(value: Any, key: Key) -> bool:
    return callable(value) and not _is_list_slot(key)


def _safe_replace(key: Key, value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return value if is_safe_int(value) else f"{value}n"
    if isinstance(value, float):
        if math.isnan(value):
            return NAN_TOKEN
        if math.isinf(value):
            return POSITIVE_INFINITY_TOKEN if value > 0 else NEGATIVE_INFINITY_TOKEN
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    if callable(getattr(value, "to_json", None)):
        return value.to_json()
    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclass_fields(value)}
    if callable(value):
        return None
    return value


safe_json_replacer: JsonReplacerFunction = create_json_replacer(  # type: ignore[assignment]
    filter=_safe_filter,
    ignore=_safe_ignore,
    replacer=_safe_replace,
)


def safe_json_reviver(key: Key, value: Any) -> Any:
    """Restore values encoded by the safe replacer."""
    if isinstance(value, str):
        if value in _FLOAT_TOKENS:
            return _FLOAT_TOKENS[value]
        match = BIG_INT_PATTERN.fullmatch(value)
        if match:
            return int(match.group("value"))
    return value


def apply_replacer(value: Any, replacer: JsonReplacer, key: Key = "") -> Any:
    """Apply a replacer to a value and, recursively, to its members.

    Returns:
        The replaced value, OMIT when the top value itself is left out.
    """
    if callable(replacer):
        value = replacer(key, value)
        if value is OMIT:
            return OMIT
    if isinstance(value, Mapping):
        result = {}
        for member_key, member in value.items():
            if isinstance(replacer, list) and not any(
                str(member_key) == str(field) for field in replacer
            ):
                continue
            replaced = apply_replacer(member, replacer, member_key)
            if replaced is not OMIT:
                result[member_key] = replaced
        return result
    if isinstance(value, (list, tuple)):
        items = []
        for index, item in enumerate(value):
            replaced = apply_replacer(item, replacer, index)
            items.append(None if replaced is OMIT else replaced)
        return items
    return value


def apply_reviver(value: Any, reviver: JsonReviver, key: Key = "") -> Any:
    """Apply a reviver bottom-up, members before their container."""
    if isinstance(value, dict):
        revived = {}
        for member_key, member in value.items():
            result = apply_reviver(member, reviver, member_key)
            if result is not OMIT:
                revived[member_key] = result
        value = revived
    elif isinstance(value, list):
        value = [apply_reviver(item, reviver, index) for index, item in enumerate(value)]
    return reviver(key, value)


def dumps(value: Any, replacer: JsonReplacer = safe_json_replacer, **kwargs: Any) -> str:
    """Serialize a value to JSON text through a replacer.

    Args:
        value: The value.
        replacer: Replacer function or allowed field list. Defaults to the
            safe replacer.
        **kwargs: Passed to json.dumps.

    Returns:
        JSON text. Bare NaN or Infinity tokens are never written.
    """
    kwargs.setdefault("allow_nan", False)
    replaced = apply_replacer(value, replacer)
    return json.dumps(None if replaced is OMIT else replaced, **kwargs)


def loads(text: str | bytes, reviver: JsonReviver | None = safe_json_reviver, **kwargs: Any) -> Any:
    """Parse JSON text and revive sentinel values.

    Args:
        text: JSON text.
        reviver: Reviver applied to every value, None to skip reviving.
        **kwargs: Passed to json.loads.
    """
    value = json.loads(text, **kwargs)
    if reviver is None:
        return value
    return apply_reviver(value, reviver)
