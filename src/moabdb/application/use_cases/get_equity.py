# src/moabdb/application/use_cases/get_equity.py
# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""Use case: Get equity data.

Synopsis:
    Fetches daily or intraday equity data for one symbol and window in a
    single request/response round trip.

Responsibilities:
    * Select the datatype and build the protocol request (window bounds as
      u32 Unix seconds, empty credentials when none are supplied).
    * Send it through the transport client exactly once.
    * Decode the response and map its status code to a ``MoabError``.
    * Hand the payload to the table decoder.
    * Record latency/outcome metrics.

Every failure is returned as ``Err(MoabError)``; nothing is raised for
encoding, transport, protocol or payload problems. A request that cannot be
encoded (e.g. a symbol that is not valid UTF-8) is ``REQUEST_ERROR`` and never
reaches the network.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Final

import pandas as pd

from moabdb.domain.entities.credentials import Credentials
from moabdb.domain.entities.window import Window
from moabdb.domain.enums.datatype import Datatype
from moabdb.domain.enums.errors import MoabError
from moabdb.domain.results import Err, Ok, Result
from moabdb.infrastructure.decoding.parquet import decode_table
from moabdb.infrastructure.external_apis.moabdb.client import MoabDBClient
from moabdb.infrastructure.external_apis.moabdb.protocol import (
    U32_MAX,
    Request,
    from_wire,
    to_wire,
)
from moabdb.infrastructure.external_apis.moabdb.settings import get_settings
from moabdb.infrastructure.logging.logger import get_json_logger
from moabdb.infrastructure.observability.metrics import record_request

__all__ = ["GetEquityUseCase", "build_request", "fetch", "get_equity", "map_status"]

_LOGGER = get_json_logger(__name__)

_STATUS_OK: Final[int] = 200
_STATUS_ERRORS: Final[dict[int, MoabError]] = {
    400: MoabError.REQUEST_ERROR,
    401: MoabError.UNAUTHORIZED,
    404: MoabError.NOT_FOUND,
    500: MoabError.SERVER_INTERNAL_ERROR,
}

TableDecoder = Callable[[bytes], pd.DataFrame]


def _to_u32_seconds(ts: datetime) -> int:
    """Unix seconds of ``ts`` wrapped into the u32 range.

    Naive timestamps are read as UTC. Values outside 1970..2106 wrap.
    """
    aware = ts if ts.tzinfo is not None else ts.replace(tzinfo=UTC)
    return math.floor(aware.timestamp()) & U32_MAX


def build_request(
    symbol: str,
    window: Window,
    datatype: Datatype,
    credentials: Credentials | None = None,
) -> Request:
    """Build the protocol request for one call."""
    return Request(
        symbol=symbol,
        start=_to_u32_seconds(window.start),
        end=_to_u32_seconds(window.end),
        datatype=datatype.value,
        username=credentials.username if credentials is not None else "",
        token=credentials.token if credentials is not None else "",
    )


def map_status(code: int) -> MoabError | None:
    """Return the error for a response ``code``, or ``None`` for success."""
    if code == _STATUS_OK:
        return None
    return _STATUS_ERRORS.get(code, MoabError.UNKNOWN_ERROR)


class GetEquityUseCase:
    """Fetch an equity table through a MoabDB transport client."""

    def __init__(self, *, client: MoabDBClient, decoder: TableDecoder = decode_table) -> None:
        self._client = client
        self._decoder = decoder

    def execute(
        self,
        symbol: str,
        window: Window,
        *,
        intraday: bool = False,
        credentials: Credentials | None = None,
    ) -> Result[pd.DataFrame, MoabError]:
        """Execute the use case.

        Args:
            symbol: Ticker symbol, e.g. ``"AAPL"``.
            window: Absolute request window.
            intraday: Request intraday instead of daily data.
            credentials: Optional credentials; ``None`` sends empty strings.

        Returns:
            ``Ok(DataFrame)`` or ``Err(MoabError)``.
        """
        datatype = Datatype.for_intraday(intraday)
        start = time.perf_counter()
        result = self._execute(symbol, window, datatype, credentials)
        outcome = "success" if isinstance(result, Ok) else result.error.value
        record_request(
            datatype=datatype.value,
            outcome=outcome,
            elapsed_s=time.perf_counter() - start,
        )
        return result

    def _execute(
        self,
        symbol: str,
        window: Window,
        datatype: Datatype,
        credentials: Credentials | None,
    ) -> Result[pd.DataFrame, MoabError]:
        log_fields: dict[str, object] = {"symbol": symbol, "datatype": datatype.value}
        try:
            request = build_request(symbol, window, datatype, credentials)
            wire = to_wire(request)
        except (ValueError, OverflowError) as exc:
            # UnicodeEncodeError (unencodable symbol or credentials) is a ValueError.
            _LOGGER.warning(
                "moabdb_request_encode_failed",
                extra={"extra": {**log_fields, "error": type(exc).__name__}},
            )
            return Err(MoabError.REQUEST_ERROR)

        log_fields.update(start=request.start, end=request.end)
        _LOGGER.debug("moabdb_request_sent", extra={"extra": log_fields})

        match self._client.send(wire):
            case Ok(body):
                pass
            case Err(error):
                return Err(error)

        match from_wire(body):
            case Ok(response):
                pass
            case Err(_):
                # Wire decode failures share the transport error kind.
                _LOGGER.warning("moabdb_response_decode_failed", extra={"extra": log_fields})
                return Err(MoabError.TRANSPORT_ERROR)

        error = map_status(response.code)
        if error is not None:
            _LOGGER.info(
                "moabdb_response_error",
                extra={"extra": {**log_fields, "code": response.code, "error": error.value}},
            )
            return Err(error)

        try:
            table = self._decoder(response.data)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.warning(
                "moabdb_table_decode_failed",
                extra={"extra": {**log_fields, "error": type(exc).__name__}},
            )
            return Err(MoabError.TRANSPORT_ERROR)

        _LOGGER.debug(
            "moabdb_request_succeeded",
            extra={"extra": {**log_fields, "rows": len(table)}},
        )
        return Ok(table)


def get_equity(
    symbol: str,
    window: Window,
    intraday: bool = False,
    credentials: Credentials | None = None,
    *,
    client: MoabDBClient | None = None,
) -> Result[pd.DataFrame, MoabError]:
    """Get the equity data for a given ticker.

    Args:
        symbol: Ticker symbol of the equity.
        window: Window of time to get data for; build one with ``WindowBuilder``.
        intraday: Whether to get intraday data instead of daily data.
        credentials: Credentials for the request. ``None`` sends an
            unauthenticated request.
        client: Optional transport client. When omitted, a short-lived client
            configured from ``MOABDB_*`` settings is used and closed afterwards.

    Returns:
        ``Ok(DataFrame)`` with the equity data, or ``Err(MoabError)``.

    Example:
        >>> window = WindowBuilder().length(WindowLength.months(3)).build().unwrap()
        >>> match get_equity("AAPL", window):
        ...     case Ok(df):
        ...         print(df.head())
        ...     case Err(error):
        ...         print(f"request failed: {error}")
    """
    if client is not None:
        return GetEquityUseCase(client=client).execute(
            symbol, window, intraday=intraday, credentials=credentials
        )
    with MoabDBClient(get_settings()) as owned:
        return GetEquityUseCase(client=owned).execute(
            symbol, window, intraday=intraday, credentials=credentials
        )


fetch = get_equity
