"""Domain errors raised by the character engine.

Every error carries a ``kind`` so an outer layer (a REST adapter, the CLI)
can translate it without inspecting messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Kinds of domain errors."""

    TYPE = "type"
    RANGE = "range"
    DUPLICATE = "duplicate"
    ASSERTION = "assertion"


class DuneCharacterError(Exception):
    """Base class of all dunechar errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.ASSERTION


class IntegerConversionError(DuneCharacterError, TypeError):
    """Raised when a value cannot be converted to a safe integer."""

    kind = ErrorKind.TYPE


class InvalidArgumentError(DuneCharacterError, ValueError):
    """Raised when a value has the right shape but breaks a domain rule."""

    kind = ErrorKind.RANGE


class CharacterAssertionError(DuneCharacterError, AssertionError):
    """Raised by internal invariant checks."""

    kind = ErrorKind.ASSERTION


class DuplicateEntityError(CharacterAssertionError):
    """Raised when two members of a character sub-group collide.

    Attributes:
        sub_group: Name of the sub-group ("trait", "talent", "asset").
        indices: Indices of the colliding members, earliest first.
        entity: Name of the offending member.
    """

    kind = ErrorKind.DUPLICATE

    def __init__(self, sub_group: str, indices: Sequence[int], entity: str | None = None) -> None:
        self.sub_group = sub_group
        self.indices = tuple(indices)
        self.entity = entity
        if len(self.indices) > 1:
            where = " and ".join(str(index) for index in self.indices)
        else:
            where = str(self.indices[0]) if self.indices else "?"
        super().__init__(f"Duplicate {sub_group} at {where}")


class MalformedCharacterError(DuneCharacterError, TypeError):
    """Raised when character options have the wrong structure.

    Sub-groups of members must be sequences, skills and drives mappings.
    """

    kind = ErrorKind.TYPE
