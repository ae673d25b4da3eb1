"""Settings of the character engine.

Pydantic-based settings loaded from ``DUNECHAR_*`` environment variables and
an optional ``.env`` file.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class CharacterSettings(BaseSettings):
    """Defaults used when building and checking characters.

    Environment Variables:
        DUNECHAR_FAIL_ON_FIRST: Raise on the first invalid member (default: true)
        DUNECHAR_NORMALIZE_ON_CREATE: Fold duplicate traits on creation (default: false)
        DUNECHAR_DEFAULT_SKILL_VALUE: Starting skill value (default: 4)
        DUNECHAR_DEFAULT_DRIVE_VALUE: Starting drive value of major characters (default: 4)
        DUNECHAR_MINOR_DRIVE_VALUE: Value of the single drive of minor characters (default: 5)
        DUNECHAR_TALENT_DESCRIPTION: Description of templated talents, "{name}"
            is replaced with the talent name (default: "Talent {name}.")
        DUNECHAR_JSON_INDENT: Indentation of JSON printed by the CLI (default: 2)

    Example:
        >>> settings = CharacterSettings()
        >>> settings = CharacterSettings(_env_file=".env")
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNECHAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    fail_on_first: bool = Field(
        default=True,
        description="Raise on the first invalid member instead of collecting a report",
    )
    normalize_on_create: bool = Field(
        default=False,
        description="Normalize characters when they are created",
    )
    default_skill_value: int = Field(default=4, ge=1, le=8, description="Starting skill value")
    default_drive_value: int = Field(default=4, ge=1, le=8, description="Starting drive value")
    minor_drive_value: int = Field(
        default=5,
        ge=1,
        le=8,
        description="Value of the single drive of a minor character",
    )
    talent_description: str = Field(
        default="Talent {name}.",
        description="Description template of talents created from templates",
    )
    json_indent: int | None = Field(default=2, ge=0, description="JSON output indentation")

    @field_validator("talent_description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        """Validate that the talent description template is not blank."""
        if not v.strip():
            raise ValueError("talent_description cannot be empty")
        return v


@lru_cache
def get_settings() -> CharacterSettings:
    """Get the cached settings singleton.

    To reload settings, call get_settings.cache_clear() first.

    Returns:
        CharacterSettings loaded from the environment.
    """
    settings = CharacterSettings()
    logger.debug("Loaded character settings: %r", settings)
    return settings
