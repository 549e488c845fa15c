"""Configuration for the round level indicator.

Process-wide settings come from environment variables (or a `.env` file)
through Pydantic's `BaseSettings`. Per-chart user input lives in
`IndicatorConfig`, which the indicator validates on every settings update.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels.errors import InvalidConfiguration
from .levels.tiers import DEFAULT_COLOR, hex_to_rgb, normalize_color

logger = logging.getLogger(__name__)

DEFAULT_BASE_UNIT = 50


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    round_level_color: str = Field(
        default=DEFAULT_COLOR,
        validation_alias=AliasChoices("ROUND_LEVEL_COLOR", "round_level_color"),
    )
    round_level_factor: int = Field(
        default=DEFAULT_BASE_UNIT,
        validation_alias=AliasChoices("ROUND_LEVEL_FACTOR", "round_level_factor"),
    )
    dev_debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("DEV_DEBUG", "ROUND_LEVEL_DEBUG", "dev_debug"),
    )
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    chart_width: int = Field(default=1200, validation_alias=AliasChoices("CHART_WIDTH", "chart_width"))
    chart_height: int = Field(default=800, validation_alias=AliasChoices("CHART_HEIGHT", "chart_height"))

    @field_validator("round_level_factor", mode="before")
    @classmethod
    def _reset_bad_factor(cls, value: Any) -> int:
        try:
            factor = int(value)
        except (TypeError, ValueError):
            factor = 0
        if factor <= 0:
            logger.warning("Invalid ROUND_LEVEL_FACTOR=%r; falling back to %d", value, DEFAULT_BASE_UNIT)
            return DEFAULT_BASE_UNIT
        return factor

    @field_validator("round_level_color", mode="before")
    @classmethod
    def _reset_bad_color(cls, value: Any) -> str:
        try:
            return normalize_color(value)
        except InvalidConfiguration:
            logger.warning("Invalid ROUND_LEVEL_COLOR=%r; falling back to %s", value, DEFAULT_COLOR)
            return DEFAULT_COLOR


@lru_cache()
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()


class IndicatorConfig(BaseModel):
    """User-editable inputs of one indicator instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    color: str = DEFAULT_COLOR
    base_unit: int = Field(DEFAULT_BASE_UNIT, gt=0, strict=True)
    debug_enabled: bool = False

    @field_validator("color", mode="before")
    @classmethod
    def _normalize_color(cls, value: Any) -> str:
        return normalize_color(value)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return hex_to_rgb(self.color)


def config_from_settings(settings: Settings | None = None) -> IndicatorConfig:
    settings = settings or get_settings()
    return IndicatorConfig(
        color=settings.round_level_color,
        base_unit=settings.round_level_factor,
        debug_enabled=settings.dev_debug,
    )


__all__ = [
    "DEFAULT_BASE_UNIT",
    "IndicatorConfig",
    "Settings",
    "config_from_settings",
    "get_settings",
]
