# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Server-side dataset selectors."""

from __future__ import annotations

from enum import Enum


class Datatype(str, Enum):
    """Dataset granularity requested from the server."""

    DAILY_STOCKS = "daily_stocks"
    INTRADAY_STOCKS = "intraday_stocks"

    @classmethod
    def for_intraday(cls, intraday: bool) -> Datatype:
        """Return the selector matching the ``intraday`` flag."""
        return cls.INTRADAY_STOCKS if intraday else cls.DAILY_STOCKS

    def __str__(self) -> str:
        return self.value
