"""
Configuration models.

Provides Pydantic models for the sections of the specguard configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict

from .base import SpecguardBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(SpecguardBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True
