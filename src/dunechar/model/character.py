"""The Dune RPG character and its validation.

A ``DuneCharacter`` owns traits, talents, assets, skills and drives. Checking
verifies the shape of every member (``TRAIT_MEMBER`` and friends), then scans
each sub-group for duplicates under the sub-group's identity rule:

- traits collide by name,
- talents collide when both are unique and share a name,
- assets collide when they are asset-equal (see ``equal_assets``).

Skills and drives are mappings from names to values; checking verifies the
names and that every value is a safe integer.

Duplicate traits are not an error in the rules: a character may hold a trait
several times. ``normalize()`` folds them into one trait with a higher count.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

from dunechar.config import get_settings
from dunechar.errors import (
    DuneCharacterError,
    DuplicateEntityError,
    IntegerConversionError,
    InvalidArgumentError,
    MalformedCharacterError,
)
from dunechar.model.entities import CHOOSE_NAME, DRIVE_NAMES, SKILL_NAMES
from dunechar.model.equality import strict_equality
from dunechar.model.integer import is_integer, to_integer
from dunechar.model.interfaces import Interface, get_member, is_iterable, set_member
from dunechar.model.names import is_named
from dunechar.model.predicates import (
    ASSET_MEMBER,
    TALENT_MEMBER,
    TRAIT_MEMBER,
    entity_name,
    equal_assets,
    equal_talent_identities,
    talent_identity,
    trait_identity,
)

logger = logging.getLogger(__name__)

SUB_GROUPS: tuple[str, ...] = ("traits", "assets", "talents", "skills", "drives")

ErrorReport = dict[str, list[DuneCharacterError]]
CharacterReport = dict[str, ErrorReport]


def _identity(value: Any) -> Any:
    return value


def _members(option: str, value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not is_iterable(value):
        raise MalformedCharacterError(
            f"The {option} option must be a list, not {type(value).__name__}"
        )
    return list(value)


def _values(option: str, value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise MalformedCharacterError(
            f"The {option} option must be a mapping, not {type(value).__name__}"
        )
    return dict(value)


class DuneCharacter:
    """A character of the Dune RPG.

    Attributes:
        name: The character name.
        owner: The user owning the character.
        allowed_users: Users allowed to view the character.
        traits: Trait-like members.
        talents: Talent-like members.
        assets: Asset-like members.
        skills: Skill values by skill name.
        drives: Drive values by drive name.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        owner: str | None = None,
        allowed_users: Iterable[str] | None = None,
        traits: Iterable[Any] | None = None,
        talents: Iterable[Any] | None = None,
        assets: Iterable[Any] | None = None,
        skills: Mapping[str, Any] | None = None,
        drives: Mapping[str, Any] | None = None,
        normalize: bool | None = None,
        fail_on_first: bool | None = None,
    ) -> None:
        """Create a character.

        The character is normalized (when requested) and then checked.

        Args:
            name: The character name.
            owner: The owning user.
            allowed_users: Users allowed to view the character.
            traits: Traits of the character.
            talents: Talents of the character.
            assets: Assets of the character.
            skills: Skill values by name.
            drives: Drive values by name.
            normalize: Fold duplicate traits first. Defaults to the
                normalize_on_create setting.
            fail_on_first: Raise on the first error. Defaults to the
                fail_on_first setting.

        Raises:
            MalformedCharacterError: A sub-group is not a list, or skills or
                drives are not a mapping. Raised whatever fail_on_first says.
            DuneCharacterError: fail_on_first is set and the character is invalid.
        """
        settings = get_settings()
        self.name = name
        self.owner = owner
        self.allowed_users = _members("allowed_users", allowed_users)
        self.traits = _members("traits", traits)
        self.talents = _members("talents", talents)
        self.assets = _members("assets", assets)
        self.skills = _values("skills", skills)
        self.drives = _values("drives", drives)

        if normalize if normalize is not None else settings.normalize_on_create:
            self.normalize()
        self.check(settings.fail_on_first if fail_on_first is None else fail_on_first)

    @classmethod
    def from_dict(cls, options: Mapping[str, Any], **overrides: Any) -> DuneCharacter:
        """Create a character from an options mapping.

        Unknown keys are ignored.

        Raises:
            MalformedCharacterError: options is not a mapping.
        """
        if not isinstance(options, Mapping):
            raise MalformedCharacterError(
                f"Character options must be a mapping, not {type(options).__name__}"
            )
        known = (
            "name",
            "owner",
            "allowed_users",
            "traits",
            "talents",
            "assets",
            "skills",
            "drives",
            "normalize",
            "fail_on_first",
        )
        kwargs = {key: options[key] for key in known if key in options}
        kwargs.update(overrides)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary form of the character for serialization."""

        def plain(member: Any) -> Any:
            if is_dataclass(member) and not isinstance(member, type):
                return asdict(member)
            return member

        return {
            "name": self.name,
            "owner": self.owner,
            "allowed_users": list(self.allowed_users),
            "traits": [plain(trait) for trait in self.traits],
            "talents": [plain(talent) for talent in self.talents],
            "assets": [plain(asset) for asset in self.assets],
            "skills": dict(self.skills),
            "drives": dict(self.drives),
        }

    def __repr__(self) -> str:
        return (
            f"DuneCharacter(name={self.name!r}, traits={len(self.traits)}, "
            f"talents={len(self.talents)}, assets={len(self.assets)})"
        )

    @staticmethod
    def check_duplicity(
        collection: Sequence[Any],
        tested: Any,
        identity_fn: Callable[[Any], Any] = _identity,
        equality_fn: Callable[[Any, Any], bool] = strict_equality,
    ) -> int:
        """Index of the first member of collection with the identity of tested, -1 if none."""
        tested_identity = identity_fn(tested)
        for index, member in enumerate(collection):
            if equality_fn(identity_fn(member), tested_identity):
                return index
        return -1

    @staticmethod
    def check_sub_group(
        sub_group: str,
        members: Sequence[Any],
        identity_fn: Callable[[Any], Any],
        identity_equality_fn: Callable[[Any, Any], bool],
        new_member: Any = None,
        fail_on_first: bool = True,
    ) -> ErrorReport:
        """Scan a sub-group for duplicates.

        Without new_member, every member is compared with all members before
        it. With new_member, every member is compared with new_member.

        Args:
            sub_group: Sub-group name used in error messages.
            members: The members.
            identity_fn: Maps a member to its identity.
            identity_equality_fn: Equality of identities.
            new_member: A member about to be added.
            fail_on_first: Raise on the first duplicate.

        Returns:
            Errors by offending member name.

        Raises:
            DuplicateEntityError: fail_on_first is set and a duplicate was found.
        """
        errors: ErrorReport = {}
        for index, tested in enumerate(members):
            if new_member is None:
                earlier = DuneCharacter.check_duplicity(
                    members[:index], tested, identity_fn, identity_equality_fn
                )
                error = (
                    DuplicateEntityError(sub_group, (earlier, index), entity_name(tested))
                    if earlier >= 0
                    else None
                )
            elif DuneCharacter.check_duplicity(
                [tested], new_member, identity_fn, identity_equality_fn
            ) >= 0:
                error = DuplicateEntityError(sub_group, (index,), entity_name(new_member))
            else:
                error = None

            if error is None:
                continue
            if fail_on_first:
                raise error
            logger.info(
                "%s",
                error,
                extra={
                    "sub_group": sub_group,
                    "entity": error.entity,
                    "indices": list(error.indices),
                },
            )
            errors.setdefault(error.entity or str(index), []).append(error)
        return errors

    @staticmethod
    def check_shapes(
        sub_group: str,
        members: Sequence[Any],
        interface: Interface,
        fail_on_first: bool = True,
        first_index: int = 0,
    ) -> ErrorReport:
        """Check that every member of a sub-group satisfies interface.

        Members that are not objects at all raise ``MalformedCharacterError``,
        members with a missing or invalid member ``InvalidArgumentError``.
        Messages number members from first_index.

        Returns:
            Errors by offending member name.

        Raises:
            DuneCharacterError: fail_on_first is set and a member is malformed.
        """
        errors: ErrorReport = {}
        for index, member in enumerate(members, first_index):
            result = interface.check(member)
            if result:
                continue
            error: DuneCharacterError
            if result.failed_member:
                error = InvalidArgumentError(
                    f"Invalid {sub_group} at {index}: bad member {result.failed_member!r}"
                )
            else:
                error = MalformedCharacterError(
                    f"Invalid {sub_group} at {index}: {type(member).__name__} is not an object"
                )
            if fail_on_first:
                raise error
            logger.info(
                "%s", error, extra={"sub_group": sub_group, "entity": entity_name(member)}
            )
            errors.setdefault(entity_name(member), []).append(error)
        return errors

    def check_traits(self, fail_on_first: bool = True) -> ErrorReport:
        """Check trait shapes and that no two traits share a name."""
        return _merge_reports(
            self.check_shapes("trait", self.traits, TRAIT_MEMBER, fail_on_first),
            self.check_sub_group(
                "trait", self.traits, trait_identity, strict_equality, fail_on_first=fail_on_first
            ),
        )

    def check_talents(self, fail_on_first: bool = True) -> ErrorReport:
        """Check talent shapes and that no two unique talents share a name."""
        return _merge_reports(
            self.check_shapes("talent", self.talents, TALENT_MEMBER, fail_on_first),
            self.check_sub_group(
                "talent",
                self.talents,
                talent_identity,
                equal_talent_identities,
                fail_on_first=fail_on_first,
            ),
        )

    def check_assets(self, fail_on_first: bool = True) -> ErrorReport:
        """Check asset shapes and that no two assets are asset-equal."""
        return _merge_reports(
            self.check_shapes("asset", self.assets, ASSET_MEMBER, fail_on_first),
            self.check_sub_group(
                "asset", self.assets, _identity, equal_assets, fail_on_first=fail_on_first
            ),
        )

    @staticmethod
    def _check_values(
        sub_group: str,
        values: Mapping[str, Any],
        valid_name: Callable[[str], bool],
        fail_on_first: bool,
    ) -> ErrorReport:
        errors: ErrorReport = {}
        for name, value in values.items():
            found: list[DuneCharacterError] = []
            if not valid_name(name):
                found.append(InvalidArgumentError(f"Invalid {sub_group} name {name!r}"))
            if not is_integer(value):
                found.append(
                    IntegerConversionError(
                        f"The {sub_group} {name!r} value {value!r} is not an integer"
                    )
                )
            if found and fail_on_first:
                raise found[0]
            if found:
                errors.setdefault(str(name), []).extend(found)
        return errors

    def check_skills(self, fail_on_first: bool = True) -> ErrorReport:
        """Check that skills have valid names and integer values."""
        return self._check_values("skill", self.skills, is_named, fail_on_first)

    def check_drives(self, fail_on_first: bool = True) -> ErrorReport:
        """Check that drives have valid names and integer values."""
        return self._check_values(
            "drive", self.drives, lambda name: name == CHOOSE_NAME or is_named(name), fail_on_first
        )

    def check(self, fail_on_first: bool = True) -> CharacterReport:
        """Check the whole character.

        Args:
            fail_on_first: Raise on the first error instead of collecting.

        Returns:
            Errors by sub-group and member name. Clean sub-groups map to an
            empty dict.

        Raises:
            DuneCharacterError: fail_on_first is set and there was an error.
        """
        report: CharacterReport = {
            "traits": self.check_traits(fail_on_first),
            "assets": self.check_assets(fail_on_first),
            "talents": self.check_talents(fail_on_first),
            "skills": self.check_skills(fail_on_first),
            "drives": self.check_drives(fail_on_first),
        }
        logger.debug(
            "Checked character %r: %d erroneous members",
            self.name,
            sum(len(errors) for errors in report.values()),
        )
        return report

    def normalize(self) -> None:
        """Normalize the character: fold duplicate traits."""
        self.normalize_traits()

    def normalize_traits(self) -> None:
        """Fold each duplicate trait into its first occurrence, raising its count by one."""
        folded: list[Any] = []
        for trait in self.traits:
            if not TRAIT_MEMBER(trait):
                # Left in place for check() to report
                folded.append(trait)
                continue
            index = self.check_duplicity(folded, trait, trait_identity, strict_equality)
            if index >= 0:
                _increment_count(folded[index])
                logger.info("Folded duplicate trait %r", entity_name(trait))
            else:
                folded.append(trait)
        self.traits = folded

    def add_trait(self, trait: Any) -> None:
        """Add a trait; a trait already held raises the count of the held one.

        Raises:
            DuneCharacterError: The trait is malformed.
        """
        self.check_shapes("trait", [trait], TRAIT_MEMBER, first_index=len(self.traits))
        index = self.check_duplicity(self.traits, trait, trait_identity, strict_equality)
        if index >= 0:
            _increment_count(self.traits[index])
        else:
            self.traits.append(trait)

    def add_talent(self, talent: Any) -> None:
        """Add a talent.

        Raises:
            DuneCharacterError: The talent is malformed.
            DuplicateEntityError: The character already has this unique talent.
        """
        self.check_shapes("talent", [talent], TALENT_MEMBER, first_index=len(self.talents))
        self.check_sub_group(
            "talent", self.talents, talent_identity, equal_talent_identities, new_member=talent
        )
        self.talents.append(talent)

    def add_asset(self, asset: Any) -> None:
        """Add an asset.

        Raises:
            DuneCharacterError: The asset is malformed.
            DuplicateEntityError: The character already has an equal asset.
        """
        self.check_shapes("asset", [asset], ASSET_MEMBER, first_index=len(self.assets))
        self.check_sub_group("asset", self.assets, _identity, equal_assets, new_member=asset)
        self.assets.append(asset)


def _merge_reports(*reports: ErrorReport) -> ErrorReport:
    merged: ErrorReport = {}
    for report in reports:
        for entity, errors in report.items():
            merged.setdefault(entity, []).extend(errors)
    return merged


def _increment_count(trait: Any) -> None:
    count = get_member(trait, "count", 1)
    set_member(trait, "count", (to_integer(count) if is_integer(count) else 1) + 1)


def major_character(name: str | None = None, **options: Any) -> DuneCharacter:
    """Create a major character (player character or major NPC).

    All five drives and skills start at their configured default values.
    """
    settings = get_settings()
    options.setdefault("skills", dict.fromkeys(SKILL_NAMES, settings.default_skill_value))
    options.setdefault("drives", dict.fromkeys(DRIVE_NAMES, settings.default_drive_value))
    return DuneCharacter(name, **options)


def minor_character(name: str | None = None, **options: Any) -> DuneCharacter:
    """Create a minor character (supporting ally or minor NPC).

    Minor characters have a single drive yet to be chosen.
    """
    settings = get_settings()
    options.setdefault("skills", dict.fromkeys(SKILL_NAMES, settings.default_skill_value))
    options.setdefault("drives", {CHOOSE_NAME: settings.minor_drive_value})
    return DuneCharacter(name, **options)
