"""Entity dataclasses of the Dune RPG character sheet.

The character engine accepts any value satisfying the matching predicate in
``dunechar.model.predicates``; these dataclasses are the shapes the package
itself produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field

SKILL_NAMES: tuple[str, ...] = ("Battle", "Communication", "Discipline", "Move", "Understand")
DRIVE_NAMES: tuple[str, ...] = ("Duty", "Faith", "Justice", "Power", "Truth")

# Name of a drive or trait the player has not chosen yet
CHOOSE_NAME = "(Choose)"


@dataclass
class Trait:
    """A trait of a character. Repeated traits raise the count."""

    name: str
    description: str | None = None
    count: int = 1
    is_trait: bool = field(default=True, init=False)


@dataclass
class Asset(Trait):
    """An asset: a trait with a quality and asset types.

    Tangible assets are carried by the character and count towards the
    asset limit. Reserved assets cannot be called into a scene.
    """

    quality: int = 0
    types: list[str] = field(default_factory=list)
    tangible: bool = False
    temporary: bool = False
    reserved: bool = False
    transferrable: bool = True
    is_asset: bool = field(default=True, init=False)


@dataclass
class Talent:
    """A special ability. Non-unique talents may be taken several times."""

    name: str
    description: str
    unique: bool = True
    count: int = 1
    is_talent: bool = field(default=True, init=False)


@dataclass
class Drive:
    """A drive of a character and its statement."""

    name: str
    value: int | None = None
    challenged: bool = False
    statement: str | None = None
    is_drive: bool = field(default=True, init=False)


@dataclass
class Skill:
    name: str
    value: int = 4
    is_skill: bool = field(default=True, init=False)
