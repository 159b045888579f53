# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._errors import ConfigurationError

__all__ = ("AppSettings", "load_settings", "settings")


class AppSettings(BaseSettings, frozen=True):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    FORMTREE_ID_PREFIX: str = Field(
        default="element", description="Prefix of generated element ids"
    )
    FORMTREE_ID_SUFFIX_LENGTH: int = Field(
        default=9,
        ge=4,
        le=32,
        description="Length of the random base36 suffix of generated ids",
    )
    FORMTREE_MAX_ID_ATTEMPTS: int = Field(
        default=16,
        ge=1,
        description="How many draws an id generator gets before a collision is fatal",
    )
    FORMTREE_COPY_SUFFIX: str = Field(
        default="Copy", description="Marker appended to a duplicated label"
    )
    FORMTREE_LOG_MUTATIONS: bool = Field(
        default=True,
        description="Whether FormDocument logs each mutation at INFO",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @field_validator("FORMTREE_ID_PREFIX")
    def _validate_prefix(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("FORMTREE_ID_PREFIX cannot be empty")
        return value


def load_settings(**overrides: Any) -> AppSettings:
    """Build settings from the environment, with explicit `overrides` on top.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    try:
        return AppSettings(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid formtree settings: {e.error_count()} error(s)",
            details={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]},
            cause=e,
        ) from e


# Create a singleton instance
settings = load_settings()
# Store the instance in the class variable for singleton pattern
AppSettings._instance = settings
