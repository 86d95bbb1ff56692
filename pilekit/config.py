# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings, frozen=True):
    """Application settings with environment variable support.

    Every setting can be overridden with a ``PILEKIT_`` prefixed
    environment variable, e.g. ``PILEKIT_LAST_SHORTCUT=":end"``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PILEKIT_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = (
        Field(default="INFO", description="Level of the package logger")
    )

    # sorting defaults, see pilekit.ops.sort
    DEFAULT_SORT_DIRECTION: int = Field(
        default=1,
        description="Sort direction used when a caller omits one (1=ASC)",
    )
    DEFAULT_SORT_FLAG: Literal["default", "numeric", "string"] = Field(
        default="default",
        description="Comparison mode used when a caller omits one",
    )

    # index resolution
    LAST_SHORTCUT: str = Field(
        default=":last",
        description="Reserved read key resolving to the last integer index",
    )
    SELECTOR_IGNORE_CASE: bool = Field(
        default=True,
        description="Compile selector patterns case-insensitively",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None


# Create a singleton instance
settings = AppSettings()
# Store the instance in the class variable for singleton pattern
AppSettings._instance = settings
