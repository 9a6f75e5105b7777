# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings, frozen=True):
    """Library settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="ORIGIN_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: str = Field(
        default="WARNING", description="Level of the package logger"
    )
    WILDCARD_EVENT: str = Field(
        default="all",
        description="Event name whose listeners receive every event",
    )
    TRACE_DISPATCH: bool = Field(
        default=False,
        description="Log every callback invocation at DEBUG level",
    )
    DEFAULT_CLASS_NAME: str = Field(
        default="AnonymousClass",
        description="Name given to composed classes created without one",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @field_validator("LOG_LEVEL", mode="before")
    def _validate_log_level(cls, value: Any) -> str:
        if isinstance(value, int):
            return logging.getLevelName(value)
        value = str(value).upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.LOG_LEVEL)


# Create a singleton instance
settings = AppSettings()
# Store the instance in the class variable for singleton pattern
AppSettings._instance = settings
