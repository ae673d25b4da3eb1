"""A set with a pluggable equality function.

``GenericSet`` owns a list of members and never inherits a built-in
collection. Membership uses the equality function chosen at creation, so
unhashable values and custom notions of sameness (for example asset equality)
are supported. Sets using a known equality serialize to JSON with the name of
their equality.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from dunechar.errors import InvalidArgumentError
from dunechar.model.collection_equality import equal_sets
from dunechar.model.equality import (
    KNOWN_EQUALITIES,
    EqualityFunction,
    equality_name,
    same_value_zero,
)
from dunechar.model.interfaces import is_function
from dunechar.model.setlike import is_set_like

T = TypeVar("T")


class GenericSet(Generic[T]):
    """Set of members distinct under an equality function.

    Example:
        >>> members = GenericSet([0.0, -0.0, float("nan"), float("nan")])
        >>> len(members)
        2
    """

    def __init__(
        self,
        elements: Iterable[T] = (),
        equality_fn: EqualityFunction | str = same_value_zero,
    ) -> None:
        """Create a set.

        Args:
            elements: Initial members; duplicates are skipped.
            equality_fn: Equality function or the name of a known one.

        Raises:
            InvalidArgumentError: The equality is unknown or not a two
                argument function.
        """
        if isinstance(equality_fn, str):
            if equality_fn not in KNOWN_EQUALITIES:
                raise InvalidArgumentError(f"Unknown equality {equality_fn!r}")
            equality_fn = KNOWN_EQUALITIES[equality_fn]
        if not is_function(equality_fn, min_params=2, max_params=2):
            raise InvalidArgumentError("The equality must be a function of two parameters")
        self._equality_fn = equality_fn
        self._members: list[T] = []
        for element in elements:
            self.add(element)

    @property
    def equality_fn(self) -> EqualityFunction:
        return self._equality_fn

    @property
    def size(self) -> int:
        return len(self._members)

    def _index(self, value: Any) -> int:
        for index, member in enumerate(self._members):
            if self._equality_fn(member, value):
                return index
        return -1

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, value: object) -> bool:
        return self._index(value) >= 0

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._members))

    def keys(self) -> list[T]:
        return list(self._members)

    def values(self) -> list[T]:
        return list(self._members)

    def add(self, value: T) -> None:
        """Add a member unless an equal member exists."""
        if self._index(value) < 0:
            self._members.append(value)

    def discard(self, value: T) -> None:
        """Remove the member equal to value, if any."""
        index = self._index(value)
        if index >= 0:
            del self._members[index]

    def remove(self, value: T) -> None:
        """Remove the member equal to value.

        Raises:
            KeyError: No member is equal to value.
        """
        index = self._index(value)
        if index < 0:
            raise KeyError(value)
        del self._members[index]

    def clear(self) -> None:
        self._members.clear()

    def __eq__(self, other: object) -> bool:
        if not is_set_like(other):
            return NotImplemented
        return equal_sets(self, other, self._equality_fn)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        name = equality_name(self._equality_fn) or getattr(
            self._equality_fn, "__name__", "custom"
        )
        return f"GenericSet({self._members!r}, equality={name})"

    def to_json(self) -> dict[str, Any]:
        """JSON-ready form of the set.

        Raises:
            InvalidArgumentError: The set uses a custom equality, which
                cannot be named in JSON.
        """
        name = equality_name(self._equality_fn)
        if name is None:
            raise InvalidArgumentError("A set with a custom equality cannot be serialized")
        return {"equality": name, "members": list(self._members)}

    @classmethod
    def from_json(cls, data: Any) -> GenericSet[Any]:
        """Rebuild a set from its JSON form.

        Raises:
            InvalidArgumentError: The data is not a serialized set.
        """
        if not isinstance(data, dict) or not isinstance(data.get("members"), list):
            raise InvalidArgumentError("Not a serialized generic set")
        return cls(data["members"], data.get("equality", "same_value_zero"))
