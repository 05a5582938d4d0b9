# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""
Credentials Entity

Purpose:
    Immutable username/token pair attached to outgoing MoabDB requests.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import BaseEntity

if TYPE_CHECKING:
    from moabdb.infrastructure.external_apis.moabdb.settings import MoabDBSettings


@dataclass(frozen=True, slots=True)
class Credentials(BaseEntity):
    """API credentials for authenticated requests.

    Args:
        username: Account identity (e-mail or user name).
        token: API token issued for the account.
    """

    username: str
    token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.username, str) or not isinstance(self.token, str):
            raise TypeError("username and token must be strings")

    @classmethod
    def from_settings(cls, settings: MoabDBSettings) -> Credentials | None:
        """Build credentials from ``MOABDB_USERNAME`` / ``MOABDB_TOKEN`` settings.

        Returns:
            ``None`` unless both values are configured.
        """
        if settings.username is None or settings.token is None:
            return None
        return cls(
            username=settings.username,
            token=settings.token.get_secret_value(),
        )
