"""Tests for entity dataclasses and domain predicates."""

from __future__ import annotations

from dunechar.model.entities import Asset, Drive, Skill, Talent, Trait
from dunechar.model.predicates import (
    ASSET,
    ASSET_MEMBER,
    TALENT,
    TALENT_MEMBER,
    TRAIT,
    TRAIT_MEMBER,
    entity_name,
    equal_assets,
    equal_talent_identities,
    is_asset,
    is_described,
    is_drive,
    is_optionally_described,
    is_skill,
    is_talent,
    is_trait,
    talent_identity,
)


class TestTrait:
    """Tests for is_trait."""

    def test_mapping_trait(self) -> None:
        assert is_trait({"name": "Thief", "is_trait": True})

    def test_dataclass_trait(self) -> None:
        assert is_trait(Trait("Thief"))
        assert is_trait(Trait("Thief", description="Steals things", count=2))

    def test_flag_is_required(self) -> None:
        assert not is_trait({"name": "Thief"})
        assert TRAIT.check({"name": "Thief"}).failed_member == "is_trait"

    def test_invalid_members(self) -> None:
        assert not is_trait({"name": "thief", "is_trait": True})
        assert not is_trait({"name": "Thief", "is_trait": True, "description": ""})
        assert not is_trait({"name": "Thief", "is_trait": True, "count": "x"})

    def test_primitives(self) -> None:
        assert not is_trait(None)
        assert not is_trait("Thief")
        assert TRAIT.check(42).failed_member == ""


class TestAsset:
    """Tests for is_asset."""

    def test_dataclass_asset(self) -> None:
        crysknife = Asset("Crysknife", quality=2, types=["Weapon"])
        assert is_asset(crysknife)
        assert is_trait(crysknife)

    def test_types_must_be_strings(self) -> None:
        assert not is_asset(
            {"name": "Crysknife", "is_trait": True, "is_asset": True, "types": [1]}
        )

    def test_trait_is_not_asset(self) -> None:
        assert not is_asset(Trait("Thief"))


class TestTalent:
    """Tests for is_talent."""

    def test_dataclass_talent(self) -> None:
        assert is_talent(Talent("Brilliant Mind", "Understand anything."))

    def test_description_is_required(self) -> None:
        assert not is_talent({"name": "Brilliant Mind", "is_talent": True})
        assert TALENT.check({"name": "Brilliant Mind", "is_talent": True}).failed_member == (
            "description"
        )

    def test_unique_must_be_boolean(self) -> None:
        assert not is_talent(
            {"name": "Brilliant Mind", "description": "d", "is_talent": True, "unique": "yes"}
        )


class TestMemberShapes:
    """Tests for the shapes of character sub-group members."""

    def test_flags_are_optional(self) -> None:
        assert TRAIT_MEMBER({"name": "Thief"})
        assert ASSET_MEMBER({"name": "Crysknife", "quality": 2})
        assert TALENT_MEMBER({"name": "Bold", "description": "d"})

    def test_entities_are_members(self) -> None:
        assert TRAIT_MEMBER(Trait("Thief"))
        assert ASSET_MEMBER(Asset("Crysknife"))
        assert TALENT_MEMBER(Talent("Bold", "d"))

    def test_members_are_checked(self) -> None:
        assert TRAIT_MEMBER.check(42).failed_member == ""
        assert TRAIT_MEMBER.check({"name": "Thief", "count": "x"}).failed_member == "count"
        assert ASSET_MEMBER.check({"name": "Stillsuit", "types": "Clothing"}).failed_member == (
            "types"
        )
        assert TALENT_MEMBER.check({"name": "Bold"}).failed_member == "description"

    def test_entity_contracts_extend_member_shapes(self) -> None:
        assert list(ASSET.required) == ["name", "is_trait", "is_asset"]
        assert ASSET.check({"name": "Crysknife", "is_asset": True}).failed_member == "is_trait"


class TestDriveAndSkill:
    """Tests for is_drive and is_skill."""

    def test_standard_names(self) -> None:
        assert is_drive("Duty")
        assert is_skill("Battle")
        assert not is_drive("Battle")
        assert not is_skill("Duty")

    def test_entities(self) -> None:
        assert is_drive(Drive("Faith", value=6))
        assert is_skill(Skill("Move"))

    def test_invalid_entities(self) -> None:
        assert not is_drive({"name": "Faith", "is_drive": True, "challenged": "no"})
        assert not is_skill(Trait("Battle"))


class TestDescribed:
    """Tests for is_described and is_optionally_described."""

    def test_described(self) -> None:
        assert is_described({"description": "A trait."})
        assert not is_described({})

    def test_optionally_described(self) -> None:
        assert is_optionally_described({})
        assert is_optionally_described({"description": "A trait."})
        assert not is_optionally_described({"description": ""})
        assert not is_optionally_described(42)


class TestAssetEquality:
    """Tests for equal_assets."""

    def test_reserved_and_transferrable_are_ignored(self) -> None:
        crysknife = Asset("Crysknife", quality=2, types=["Weapon"])
        assert equal_assets(
            crysknife, Asset("Crysknife", quality=2, types=["Weapon"], reserved=True)
        )
        assert equal_assets(
            crysknife, Asset("Crysknife", quality=2, types=["Weapon"], transferrable=False)
        )

    def test_compared_fields(self) -> None:
        crysknife = Asset("Crysknife", quality=2, types=["Weapon", "Ritual"])
        assert not equal_assets(
            crysknife, Asset("Crysknife", quality=3, types=["Weapon", "Ritual"])
        )
        assert not equal_assets(
            crysknife, Asset("Crysknife", quality=2, types=["Ritual", "Weapon"])
        )
        assert not equal_assets(
            crysknife, Asset("Crysknife", quality=2, types=["Weapon", "Ritual"], tangible=True)
        )
        assert not equal_assets(
            crysknife, Asset("Crysknife", quality=2, types=["Weapon", "Ritual"], temporary=True)
        )

    def test_mapping_and_dataclass(self) -> None:
        """Missing members take their defaults."""
        mapping = {
            "name": "Crysknife",
            "quality": 2,
            "types": ["Weapon"],
            "is_trait": True,
            "is_asset": True,
        }
        assert equal_assets(mapping, Asset("Crysknife", quality=2, types=["Weapon"]))
        assert equal_assets({"name": "Stillsuit"}, {"name": "Stillsuit", "quality": 0})


class TestTalentIdentity:
    """Tests for talent identities."""

    def test_identity(self) -> None:
        assert talent_identity(Talent("Bold", "d")) == (True, "Bold")
        assert talent_identity(Talent("Bold", "d", unique=False)) == (False, "Bold")
        assert talent_identity({"name": "Bold"}) == (True, "Bold")

    def test_unique_talents_with_one_name_collide(self) -> None:
        assert equal_talent_identities((True, "Bold"), (True, "Bold"))

    def test_non_unique_talents_never_collide(self) -> None:
        assert not equal_talent_identities((False, "Bold"), (False, "Bold"))
        assert not equal_talent_identities((True, "Bold"), (False, "Bold"))

    def test_different_names(self) -> None:
        assert not equal_talent_identities((True, "Bold"), (True, "Brave"))

    def test_entity_name(self) -> None:
        assert entity_name(Trait("Thief")) == "Thief"
        assert entity_name("Battle") == "Battle"
