"""Talent templates.

Some talents of the Dune RPG are families: "Friend of [Skill]" stands for
"Friend of Battle", "Friend of Move" and so on. A ``TalentTemplate`` is built
once from such a name pattern and stamps out concrete talents from an ordered
list of arguments, one per distinct placeholder.

Placeholders are ``[Kind]`` or ``[KindIndex]``. Known kinds (Drive, Talent,
Trait, Asset, Skill) only accept values of that kind; other kinds accept any
non-empty string. Repeating a placeholder reuses the same argument, so
"Torn Between [Drive1] and [Drive2]" takes two drives while
"[Skill] Above [Skill]" takes one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from dunechar.config import get_settings
from dunechar.errors import InvalidArgumentError
from dunechar.model.collection_equality import is_sequence
from dunechar.model.entities import Talent
from dunechar.model.interfaces import get_member, is_object
from dunechar.model.names import PLACEHOLDER_PATTERN, is_named_with_placeholders
from dunechar.model.predicates import (
    is_asset,
    is_drive,
    is_non_empty_string,
    is_skill,
    is_talent,
    is_trait,
)

logger = logging.getLogger(__name__)

Gatekeeper = Callable[[Any], bool]

KIND_GATEKEEPERS: dict[str, Gatekeeper] = {
    "Drive": is_drive,
    "Talent": is_talent,
    "Trait": is_trait,
    "Asset": is_asset,
    "Skill": is_skill,
}


def display_value(value: Any) -> str:
    """Text substituted for a placeholder: the name of an entity, or the value itself."""
    if is_object(value):
        name = get_member(value, "name")
        if name is not None:
            return str(name)
    return str(value)


@dataclass(frozen=True)
class Placeholder:
    """A distinct placeholder of a template.

    Attributes:
        key: Kind and index as written, e.g. "Drive2".
        gatekeeper: Predicate accepting the argument for this placeholder.
        substitute: Converts the accepted argument to its display text.
    """

    key: str
    gatekeeper: Gatekeeper
    substitute: Callable[[Any], str] = display_value


class TalentTemplate:
    """Generator of talents from a name pattern with placeholders.

    The placeholder scan and the substitution matcher are prepared once at
    construction; instantiation only looks values up.

    Example:
        >>> template = TalentTemplate("Friend of [Skill]")
        >>> template.create_instance(["Battle"]).name
        'Friend of Battle'
    """

    def __init__(self, pattern: str, description: str | None = None) -> None:
        """Create a template.

        Args:
            pattern: Talent name with placeholders.
            description: Description template, may contain the same
                placeholders and "{name}". Defaults to the configured
                talent description.

        Raises:
            InvalidArgumentError: The pattern is not a name with placeholders.
        """
        if not is_named_with_placeholders(pattern):
            raise InvalidArgumentError(f"Invalid talent name pattern {pattern!r}")
        self._pattern = pattern
        self._description = description

        placeholders: list[Placeholder] = []
        seen: set[str] = set()
        for match in PLACEHOLDER_PATTERN.finditer(pattern):
            kind, index = match.group("kind"), match.group("index")
            key = f"{kind}{index or ''}"
            if key in seen:
                continue
            seen.add(key)
            placeholders.append(
                Placeholder(
                    key=key,
                    gatekeeper=KIND_GATEKEEPERS.get(kind, is_non_empty_string),
                )
            )
        self._placeholders = tuple(placeholders)
        self._matcher = (
            re.compile(r"\[(" + "|".join(re.escape(p.key) for p in placeholders) + r")\]")
            if placeholders
            else None
        )
        logger.debug(
            "Created talent template %r with placeholders %s",
            pattern,
            [p.key for p in placeholders],
        )

    @property
    def name(self) -> str:
        return self._pattern

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Distinct placeholder keys in order of first appearance."""
        return tuple(p.key for p in self._placeholders)

    def __repr__(self) -> str:
        return f"TalentTemplate({self._pattern!r})"

    def valid_instantiator(self, args: Any) -> bool:
        """Check the arguments of an instantiation.

        Args:
            args: Sequence holding one argument per distinct placeholder, in
                order of first appearance. Extra arguments are ignored.

        Returns:
            True if every placeholder's gatekeeper accepts its argument.
        """
        if not is_sequence(args) or len(args) < len(self._placeholders):
            return False
        return all(
            placeholder.gatekeeper(argument)
            for placeholder, argument in zip(self._placeholders, args, strict=False)
        )

    def _substitute(self, text: str, values: dict[str, str]) -> str:
        if self._matcher is None:
            return text
        return self._matcher.sub(lambda match: values[match.group(1)], text)

    def create_instance(self, args: Sequence[Any]) -> Talent:
        """Create a talent from the template.

        Args:
            args: One argument per distinct placeholder.

        Returns:
            A unique talent with count 1.

        Raises:
            InvalidArgumentError: The arguments are rejected by valid_instantiator.
        """
        if not self.valid_instantiator(args):
            raise InvalidArgumentError(
                f"Invalid arguments for talent template {self._pattern!r}: "
                f"expected {', '.join(self.placeholders) or 'nothing'}"
            )
        values = {
            placeholder.key: placeholder.substitute(argument)
            for placeholder, argument in zip(self._placeholders, args, strict=False)
        }
        name = self._substitute(self._pattern, values)
        template = self._description or get_settings().talent_description
        description = self._substitute(template, values).replace("{name}", name)
        return Talent(name=name, description=description, unique=True, count=1)


def create_talent(template: TalentTemplate, args: Sequence[Any]) -> Talent:
    """Create a talent from a template.

    Raises:
        InvalidArgumentError: The arguments are invalid for the template.
    """
    return template.create_instance(args)
