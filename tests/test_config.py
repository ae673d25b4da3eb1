"""Tests for character settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dunechar.config import CharacterSettings, get_settings


class TestCharacterSettings:
    """Tests for CharacterSettings."""

    def test_defaults(self) -> None:
        settings = CharacterSettings(_env_file=None)
        assert settings.fail_on_first is True
        assert settings.normalize_on_create is False
        assert settings.default_skill_value == 4
        assert settings.default_drive_value == 4
        assert settings.minor_drive_value == 5
        assert settings.talent_description == "Talent {name}."
        assert settings.json_indent == 2

    def test_reads_environment(self) -> None:
        env = {"DUNECHAR_DEFAULT_SKILL_VALUE": "6", "DUNECHAR_FAIL_ON_FIRST": "false"}
        with patch.dict(os.environ, env):
            settings = CharacterSettings(_env_file=None)
        assert settings.default_skill_value == 6
        assert settings.fail_on_first is False

    def test_rejects_out_of_range_value(self) -> None:
        with pytest.raises(ValidationError):
            CharacterSettings(default_skill_value=9)

    def test_rejects_blank_description(self) -> None:
        with pytest.raises(ValidationError):
            CharacterSettings(talent_description="   ")


class TestGetSettings:
    """Tests for get_settings."""

    def test_returns_cached_instance(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self) -> None:
        first = get_settings()
        get_settings.cache_clear()
        with patch.dict(os.environ, {"DUNECHAR_MINOR_DRIVE_VALUE": "7"}):
            second = get_settings()
        assert second is not first
        assert second.minor_drive_value == 7
