"""Domain model: equality, structural predicates, entities, talent templates, characters."""

from dunechar.model.character import DuneCharacter, major_character, minor_character
from dunechar.model.collection_equality import (
    equal_arrays,
    equal_maps,
    equal_sets,
    find,
    first_index,
)
from dunechar.model.entities import (
    CHOOSE_NAME,
    DRIVE_NAMES,
    SKILL_NAMES,
    Asset,
    Drive,
    Skill,
    Talent,
    Trait,
)
from dunechar.model.equality import (
    loose_equality,
    same_value,
    same_value_zero,
    strict_equality,
)
from dunechar.model.generic_set import GenericSet
from dunechar.model.integer import assert_integer, is_integer, to_integer
from dunechar.model.interfaces import (
    Interface,
    InterfaceCheck,
    implements_interface,
    is_function,
    is_iterable,
    is_iterator,
)
from dunechar.model.names import is_named, is_named_with_placeholders
from dunechar.model.predicates import (
    equal_assets,
    is_asset,
    is_described,
    is_drive,
    is_optionally_described,
    is_skill,
    is_talent,
    is_trait,
)
from dunechar.model.setlike import is_readable_set_like, is_set_like, is_writable_set_like
from dunechar.model.talent_template import TalentTemplate, create_talent

__all__ = [
    "CHOOSE_NAME",
    "DRIVE_NAMES",
    "SKILL_NAMES",
    "Asset",
    "Drive",
    "DuneCharacter",
    "GenericSet",
    "Interface",
    "InterfaceCheck",
    "Skill",
    "Talent",
    "TalentTemplate",
    "Trait",
    "assert_integer",
    "create_talent",
    "equal_arrays",
    "equal_assets",
    "equal_maps",
    "equal_sets",
    "find",
    "first_index",
    "implements_interface",
    "is_asset",
    "is_described",
    "is_drive",
    "is_function",
    "is_integer",
    "is_iterable",
    "is_iterator",
    "is_named",
    "is_named_with_placeholders",
    "is_optionally_described",
    "is_readable_set_like",
    "is_set_like",
    "is_skill",
    "is_talent",
    "is_trait",
    "is_writable_set_like",
    "loose_equality",
    "major_character",
    "minor_character",
    "same_value",
    "same_value_zero",
    "strict_equality",
    "to_integer",
]
