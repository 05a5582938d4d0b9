# tests/conftest.py
from __future__ import annotations

import io
from collections.abc import Generator

import httpx
import pandas as pd
import pytest

from moabdb.infrastructure.external_apis.moabdb.client import MoabDBClient
from moabdb.infrastructure.external_apis.moabdb.settings import MoabDBSettings

TEST_BASE_URL = "https://moabdb.test/request/v1/"


@pytest.fixture
def settings() -> MoabDBSettings:
    """Settings pointing at a host that only respx answers."""
    return MoabDBSettings(base_url=TEST_BASE_URL)


@pytest.fixture
def client(settings: MoabDBSettings) -> Generator[MoabDBClient, None, None]:
    """Transport client over a fresh httpx.Client (mock it with respx)."""
    with httpx.Client() as http:
        yield MoabDBClient(settings, http=http)


@pytest.fixture
def daily_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "ts": [1_672_704_000, 1_672_790_400, 1_672_876_800],
            "open": [130.28, 126.89, 127.13],
            "close": [125.07, 126.36, 125.02],
            "volume": [112117500, 89113600, 80962700],
        }
    )


@pytest.fixture
def parquet_bytes(daily_frame: pd.DataFrame) -> bytes:
    buf = io.BytesIO()
    daily_frame.to_parquet(buf, engine="pyarrow", index=False)
    return buf.getvalue()
