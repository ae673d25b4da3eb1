"""Structural predicates and capability contracts.

Values are never required to inherit from a model class. Instead an
``Interface`` lists the members a value must (or may) expose and a tester for
each member. Checks report the first failing member for diagnostics.

Members are looked up as keys on mappings and as attributes on other
objects. A member whose value is ``None`` counts as absent.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

MemberTester = Callable[[Any], bool]

_MISSING = object()

# Values that are never objects with members
_PRIMITIVES = (bool, int, float, complex, str, bytes, bytearray)


def is_object(value: Any) -> bool:
    """Check that a value can carry members (not None, not a primitive)."""
    return value is not None and not isinstance(value, _PRIMITIVES)


def get_member(value: Any, name: str, default: Any = None, *, by_attribute: bool = False) -> Any:
    """Read a member of a value.

    Args:
        value: The value.
        name: Member name.
        default: Returned when the member is absent.
        by_attribute: Always use attribute lookup, even for mappings.

    Returns:
        The member value, or default when absent or None.
    """
    if not by_attribute and isinstance(value, Mapping):
        try:
            member = value.get(name, _MISSING)
        except Exception:
            member = _MISSING
    else:
        try:
            member = getattr(value, name, _MISSING)
        except Exception:
            member = _MISSING
    if member is _MISSING or member is None:
        return default
    return member


def has_member(value: Any, name: str, *, by_attribute: bool = False) -> bool:
    """Check that a value exposes a non-None member."""
    return get_member(value, name, _MISSING, by_attribute=by_attribute) is not _MISSING


def set_member(value: Any, name: str, member: Any) -> None:
    """Write a member of a mapping or an object."""
    if isinstance(value, Mapping):
        value[name] = member
    else:
        setattr(value, name, member)


def _required_positional(value: Callable[..., Any]) -> int | None:
    """Count positional parameters without defaults, None if unknown."""
    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        return None
    return sum(
        1
        for parameter in signature.parameters.values()
        if parameter.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and parameter.default is inspect.Parameter.empty
    )


def is_function(value: Any, min_params: int | None = None, max_params: int | None = None) -> bool:
    """Test that a value is callable with a fitting number of required parameters.

    Args:
        value: The tested value.
        min_params: Minimum number of required positional parameters.
        max_params: Maximum number of required positional parameters. None
            means no upper bound.

    Returns:
        True if the value is callable and its required positional parameter
        count lies within [min_params, max_params]. Callables whose signature
        cannot be introspected are accepted.
    """
    if not callable(value):
        return False
    required = _required_positional(value)
    if required is None:
        return True
    if min_params is not None and required < min_params:
        return False
    if max_params is not None and required > max_params:
        return False
    return True


def is_iterable(value: Any) -> bool:
    """Test that a value implements the iteration protocol."""
    return callable(getattr(value, "__iter__", None))


def is_iterator(value: Any) -> bool:
    """Test that a value is an iterator.

    An iterator has a callable ``__next__``; the cooperative ``close`` and
    ``throw`` members must be callable when present.
    """
    if not callable(getattr(value, "__next__", None)):
        return False
    return all(
        not hasattr(value, name) or callable(getattr(value, name)) for name in ("close", "throw")
    )


def _passes(tester: MemberTester, member: Any) -> bool:
    try:
        return bool(tester(member))
    except Exception:
        return False


@dataclass(frozen=True)
class InterfaceCheck:
    """Result of an interface check.

    Attributes:
        passed: Whether the value satisfies the interface.
        failed_member: First failing member name, "" when the value is not
            an object at all, None when the check passed.
    """

    passed: bool
    failed_member: str | None = None

    def __bool__(self) -> bool:
        return self.passed


@dataclass(frozen=True)
class Interface:
    """A named capability contract.

    Attributes:
        name: Name of the contract, used in diagnostics.
        required: Members that must exist and pass their tester.
        optional: Members tested only when present.
        by_attribute: Look members up as attributes even on mappings.
    """

    name: str
    required: Mapping[str, MemberTester] = field(default_factory=dict)
    optional: Mapping[str, MemberTester] = field(default_factory=dict)
    by_attribute: bool = False

    def check(self, value: Any) -> InterfaceCheck:
        """Check a value against the contract."""
        if not is_object(value):
            return InterfaceCheck(False, "")
        for member_name, tester in self.required.items():
            member = get_member(value, member_name, _MISSING, by_attribute=self.by_attribute)
            if member is _MISSING or not _passes(tester, member):
                return InterfaceCheck(False, member_name)
        for member_name, tester in self.optional.items():
            member = get_member(value, member_name, _MISSING, by_attribute=self.by_attribute)
            if member is not _MISSING and not _passes(tester, member):
                return InterfaceCheck(False, member_name)
        return InterfaceCheck(True)

    def __call__(self, value: Any) -> bool:
        return self.check(value).passed

    def extend(
        self,
        name: str,
        required: Mapping[str, MemberTester] | None = None,
        optional: Mapping[str, MemberTester] | None = None,
    ) -> Interface:
        """Derive a wider contract.

        Members of the derived contract override members of the same name.
        """
        merged_required = {**self.required, **(required or {})}
        merged_optional = {
            key: tester
            for key, tester in {**self.optional, **(optional or {})}.items()
            if key not in merged_required
        }
        return Interface(name, merged_required, merged_optional, self.by_attribute)


def implements_interface(
    value: Any,
    required: Mapping[str, MemberTester] | None = None,
    optional: Mapping[str, MemberTester] | None = None,
) -> bool:
    """Test whether a value implements an ad-hoc interface.

    Args:
        value: The tested value.
        required: Members that must exist and pass their tester.
        optional: Members tested only if present.

    Returns:
        True if the value is an object satisfying every tester.
    """
    return Interface("anonymous", required or {}, optional or {}).check(value).passed
