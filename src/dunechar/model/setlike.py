"""Set-like capability tiers.

A set-like value has a size (``len``), a membership test (``in``) and a way to
list its keys (``keys()`` or iteration). Readable set-likes can be iterated;
writable set-likes can also be cleared and have members added or discarded.
Sequences and strings are never set-like.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Protocol, TypeGuard, TypeVar, runtime_checkable

from dunechar.model.interfaces import Interface, is_function

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class SetLike(Protocol[T_co]):
    """Size, membership and keys."""

    def __len__(self) -> int: ...

    def __contains__(self, value: object) -> bool: ...


@runtime_checkable
class ReadableSetLike(SetLike[T_co], Protocol[T_co]):
    """A set-like that can be iterated."""

    def __iter__(self) -> Iterator[T_co]: ...


@runtime_checkable
class WritableSetLike(ReadableSetLike[T], Protocol[T]):
    """A readable set-like that can be modified."""

    def add(self, value: T) -> None: ...

    def discard(self, value: T) -> None: ...

    def clear(self) -> None: ...


SET_LIKE = Interface(
    "SetLike",
    required={
        "__len__": lambda member: is_function(member, max_params=0),
        "__contains__": lambda member: is_function(member, min_params=1, max_params=1),
    },
    by_attribute=True,
)

READABLE_SET_LIKE = SET_LIKE.extend(
    "ReadableSetLike",
    required={"__iter__": lambda member: is_function(member, max_params=0)},
)

WRITABLE_SET_LIKE = READABLE_SET_LIKE.extend(
    "WritableSetLike",
    required={
        "clear": lambda member: is_function(member, max_params=0),
        "add": lambda member: is_function(member, min_params=1),
        "discard": lambda member: is_function(member, min_params=1),
    },
)


def _has_keys(value: Any) -> bool:
    return is_function(getattr(value, "keys", None), max_params=0) or is_function(
        getattr(value, "__iter__", None), max_params=0
    )


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (Sequence, str, bytes, bytearray))


def is_set_like(value: Any) -> TypeGuard[SetLike[Any]]:
    """Test whether a value provides size, membership and keys."""
    return not _is_sequence(value) and SET_LIKE(value) and _has_keys(value)


def is_readable_set_like(value: Any) -> TypeGuard[ReadableSetLike[Any]]:
    """Test whether a value is a set-like that can be iterated."""
    return is_set_like(value) and READABLE_SET_LIKE(value)


def is_writable_set_like(value: Any) -> TypeGuard[WritableSetLike[Any]]:
    """Test whether a value is an iterable set-like with clear, add and discard."""
    return is_readable_set_like(value) and WRITABLE_SET_LIKE(value)


def set_keys(value: SetLike[T]) -> list[T]:
    """List the keys of a set-like value.

    Uses ``keys()`` when the value provides it, iteration otherwise.
    """
    keys = getattr(value, "keys", None)
    source: Iterable[T] = keys() if callable(keys) else value  # type: ignore[assignment]
    return list(source)
