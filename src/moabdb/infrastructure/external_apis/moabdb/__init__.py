# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""MoabDB API transport, wire protocol and settings."""

from __future__ import annotations

from .client import REQUEST_HEADER, MoabDBClient
from .settings import DEFAULT_API_URL, MoabDBSettings, get_settings

__all__ = ["DEFAULT_API_URL", "REQUEST_HEADER", "MoabDBClient", "MoabDBSettings", "get_settings"]
