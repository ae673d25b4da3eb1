"""Domain predicates of the Dune RPG vocabulary.

Each entity kind is a capability contract (``Interface``). The ``is_*``
functions return plain booleans and never raise; call ``TRAIT.check(value)``
and friends to learn which member failed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from dunechar.model.collection_equality import equal_arrays, is_sequence
from dunechar.model.entities import DRIVE_NAMES, SKILL_NAMES
from dunechar.model.equality import strict_equality
from dunechar.model.integer import is_integer
from dunechar.model.interfaces import Interface, get_member
from dunechar.model.names import is_named


def is_true(value: Any) -> bool:
    return value is True


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def is_string_list(value: Any) -> bool:
    return is_sequence(value) and all(isinstance(item, str) for item in value)


NAMED = Interface("Named", required={"name": is_named})

DESCRIBED = Interface("Described", required={"description": is_non_empty_string})

OPTIONALLY_DESCRIBED = Interface(
    "OptionallyDescribed", optional={"description": is_non_empty_string}
)

# Shapes of character sub-group members, {"name": "Thief"} is a trait member
TRAIT_MEMBER = NAMED.extend(
    "TraitMember",
    optional={"description": is_non_empty_string, "count": is_integer},
)

ASSET_MEMBER = TRAIT_MEMBER.extend(
    "AssetMember",
    optional={
        "quality": is_integer,
        "types": is_string_list,
        "tangible": is_boolean,
        "temporary": is_boolean,
        "reserved": is_boolean,
        "transferrable": is_boolean,
    },
)

TALENT_MEMBER = NAMED.extend(
    "TalentMember",
    required={"description": is_non_empty_string},
    optional={"unique": is_boolean, "count": is_integer},
)

TRAIT = TRAIT_MEMBER.extend("Trait", required={"is_trait": is_true})

ASSET = ASSET_MEMBER.extend("Asset", required={"is_trait": is_true, "is_asset": is_true})

TALENT = TALENT_MEMBER.extend("Talent", required={"is_talent": is_true})

DRIVE = NAMED.extend(
    "Drive",
    required={"is_drive": is_true},
    optional={"challenged": is_boolean, "value": is_integer, "statement": is_non_empty_string},
)

SKILL = NAMED.extend(
    "Skill",
    required={"is_skill": is_true},
    optional={"value": is_integer},
)


def is_described(value: Any) -> bool:
    """A value with a non-empty string description."""
    return DESCRIBED(value)


def is_optionally_described(value: Any) -> bool:
    """An object without a description, or with a non-empty one."""
    return OPTIONALLY_DESCRIBED(value)


def is_trait(value: Any) -> bool:
    return TRAIT(value)


def is_asset(value: Any) -> bool:
    return ASSET(value)


def is_talent(value: Any) -> bool:
    return TALENT(value)


def is_drive(value: Any) -> bool:
    """A drive entity, or the name of one of the five standard drives."""
    return (isinstance(value, str) and value in DRIVE_NAMES) or DRIVE(value)


def is_skill(value: Any) -> bool:
    """A skill entity, or the name of one of the five standard skills."""
    return (isinstance(value, str) and value in SKILL_NAMES) or SKILL(value)


def entity_name(value: Any) -> str:
    """Name of an entity, the string form of the value if it has none."""
    name = get_member(value, "name")
    return str(name) if name is not None else str(value)


def trait_identity(trait: Any) -> Any:
    return get_member(trait, "name")


def talent_identity(talent: Any) -> tuple[bool, Any]:
    """Identity of a talent: its uniqueness and its name."""
    unique = get_member(talent, "unique", True)
    return (unique is not False, get_member(talent, "name"))


def equal_talent_identities(compared: Sequence[Any], comparee: Sequence[Any]) -> bool:
    """Two talent identities collide only when both are unique with one name."""
    return (
        len(compared) == 2
        and len(comparee) == 2
        and compared[0] is True
        and comparee[0] is True
        and strict_equality(compared[1], comparee[1])
    )


def equal_assets(compared: Any, comparee: Any) -> bool:
    """Asset equality used for duplicate detection.

    Compares name, quality, types (in order), tangible and temporary.
    Reserved and transferrable do not take part.
    """
    return (
        strict_equality(get_member(compared, "name"), get_member(comparee, "name"))
        and strict_equality(get_member(compared, "quality", 0), get_member(comparee, "quality", 0))
        and equal_arrays(
            list(get_member(compared, "types", ())), list(get_member(comparee, "types", ()))
        )
        and strict_equality(
            get_member(compared, "tangible", False), get_member(comparee, "tangible", False)
        )
        and strict_equality(
            get_member(compared, "temporary", False), get_member(comparee, "temporary", False)
        )
    )
