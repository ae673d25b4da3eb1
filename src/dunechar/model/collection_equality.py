"""Equality of sequences, set-likes and mappings.

Sequences compare index by index. Set-likes and mappings compare without
regard to order, using any equality function for their members.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from dunechar.model.equality import EqualityFunction, same_value_zero, strict_equality
from dunechar.model.setlike import is_set_like, set_keys

T = TypeVar("T")


def is_sequence(value: Any) -> bool:
    """Check for a sequence that is not a string or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def equal_arrays(
    compared: Any,
    comparee: Any,
    equality_fn: EqualityFunction = strict_equality,
) -> bool:
    """Check equality of two sequences.

    Args:
        compared: The first sequence.
        comparee: The second sequence.
        equality_fn: Equality of the elements. Defaults to strict equality.

    Returns:
        True if both are sequences of the same length whose elements at the
        same index are equal.
    """
    return (
        is_sequence(compared)
        and is_sequence(comparee)
        and len(compared) == len(comparee)
        and all(equality_fn(a, b) for a, b in zip(compared, comparee, strict=True))
    )


def equal_sets(
    compared: Any,
    comparee: Any,
    equality_fn: EqualityFunction = strict_equality,
) -> bool:
    """Check equality of two set-likes.

    Every key of compared must have an equal key in comparee and vice
    versa, so the result is correct for asymmetric or non-reflexive
    equality functions. Order is irrelevant.

    Args:
        compared: The compared set.
        comparee: The set compared to.
        equality_fn: Equality of the members, called as
            equality_fn(member_of_compared, member_of_comparee).

    Returns:
        True if the sets contain equal members.

    Raises:
        Exception: Whatever equality_fn raises for incompatible members.
    """
    if not (is_set_like(compared) and is_set_like(comparee)):
        return False
    if (
        isinstance(compared, (set, frozenset))
        and isinstance(comparee, (set, frozenset))
        and len(compared) != len(comparee)
    ):
        return False
    compared_keys = set_keys(compared)
    comparee_keys = set_keys(comparee)
    return all(
        any(equality_fn(key, other) for other in comparee_keys) for key in compared_keys
    ) and all(any(equality_fn(other, key) for other in compared_keys) for key in comparee_keys)


def _matching_key(mapping: Mapping[Any, Any], key: Any, equality_fn: EqualityFunction) -> Any:
    for candidate in mapping.keys():
        if equality_fn(key, candidate):
            return candidate
    raise KeyError(key)


def equal_maps(
    compared: Any,
    comparee: Any,
    key_equality_fn: EqualityFunction = same_value_zero,
    value_equality_fn: EqualityFunction = strict_equality,
) -> bool:
    """Check equality of two mappings.

    Args:
        compared: The compared mapping.
        comparee: The mapping compared to.
        key_equality_fn: Equality of keys. Defaults to same value zero.
        value_equality_fn: Equality of values. Defaults to strict equality.

    Returns:
        True if the key sets are equal and every key of compared maps to a
        value equal to the value of the matching key in comparee.
    """
    if not (isinstance(compared, Mapping) and isinstance(comparee, Mapping)):
        return False
    if not equal_sets(compared, comparee, key_equality_fn):
        return False
    return all(
        value_equality_fn(value, comparee[_matching_key(comparee, key, key_equality_fn)])
        for key, value in compared.items()
    )


def find(
    elements: Any,
    sought: T,
    equality_fn: EqualityFunction = strict_equality,
) -> T | None:
    """Find the first member equal to the sought value.

    Returns:
        The first equal member, None if there is none or elements is not a
        sequence.
    """
    if not is_sequence(elements):
        return None
    return next((member for member in elements if equality_fn(member, sought)), None)


def first_index(
    elements: Any,
    sought: Any,
    equality_fn: EqualityFunction = strict_equality,
) -> int:
    """Index of the first member equal to the sought value, -1 if none."""
    if not is_sequence(elements):
        return -1
    return next(
        (index for index, member in enumerate(elements) if equality_fn(member, sought)), -1
    )
