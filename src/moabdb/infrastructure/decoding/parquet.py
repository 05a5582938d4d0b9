# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Parquet table decoding for response payloads."""

from __future__ import annotations

import io

import pandas as pd


def decode_table(data: bytes) -> pd.DataFrame:
    """Read a Parquet payload into a :class:`pandas.DataFrame`.

    Raises:
        Exception: Whatever pyarrow raises for malformed input
            (typically ``pyarrow.ArrowInvalid`` or ``OSError``).
    """
    return pd.read_parquet(io.BytesIO(data), engine="pyarrow")
