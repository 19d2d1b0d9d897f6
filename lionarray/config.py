# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("AppSettings", "settings")


class AppSettings(BaseSettings, frozen=True):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LIONARRAY_LOG_LEVEL: str = Field(
        default="WARNING",
        description="Level applied to the 'lionarray' package logger",
    )

    LIONARRAY_STRICT_REENTRANCY: bool = Field(
        default=True,
        description=(
            "Raise ReentrantSwapError when content is swapped while a "
            "change notification is in flight. When false, log a warning "
            "and let the nested swap run."
        ),
    )

    LIONARRAY_TRACE_CHANGES: bool = Field(
        default=False,
        description="Log every dispatched range change at DEBUG level",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @field_validator("LIONARRAY_LOG_LEVEL", mode="before")
    def _validate_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {value}")
        return level

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.LIONARRAY_LOG_LEVEL)


# Create a singleton instance
settings = AppSettings()
# Store the instance in the class variable for singleton pattern
AppSettings._instance = settings
