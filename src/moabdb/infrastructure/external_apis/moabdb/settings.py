# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the MoabDB transport client."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.moabdb.com/request/v1/"


class MoabDBSettings(BaseSettings):
    """Configuration for the MoabDB client.

    Environment variables (with ``model_config.env_prefix``):

    * ``MOABDB_BASE_URL``
    * ``MOABDB_USERNAME``
    * ``MOABDB_TOKEN``
    * ``MOABDB_TIMEOUT_S`` (unset keeps the httpx default)
    """

    base_url: str = Field(
        DEFAULT_API_URL,
        description="Request endpoint of the MoabDB API.",
    )
    username: str | None = Field(
        None,
        description="Account identity used by Credentials.from_settings().",
    )
    token: SecretStr | None = Field(
        None,
        description="API token used by Credentials.from_settings().",
    )
    timeout_s: float | None = Field(
        None,
        description="Optional transport timeout in seconds.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="MOABDB_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> MoabDBSettings:
    """Return process-wide settings loaded from the environment."""
    return MoabDBSettings()
