# src/moabdb/infrastructure/external_apis/moabdb/client.py
# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""MoabDB Transport Client (sync).

Sends one already-encoded request as the ``x-req`` header of a GET to the
MoabDB endpoint and returns the body text:

* Synchronous httpx; the transport's default timeout unless
  ``MoabDBSettings.timeout_s`` is set.
* Exactly one attempt per call. No retries, no caching.
* The HTTP status line is ignored; the wire protocol's own ``code`` field
  carries success or failure, so the body is returned for any status.
* Network failures and non-UTF-8 bodies map to ``MoabError.TRANSPORT_ERROR``.
"""

from __future__ import annotations

from types import TracebackType
from typing import Final, Self

import httpx

from moabdb.domain.enums.errors import MoabError
from moabdb.domain.results import Err, Ok, Result
from moabdb.infrastructure.external_apis.moabdb.settings import MoabDBSettings
from moabdb.infrastructure.logging.logger import get_json_logger

__all__ = ["REQUEST_HEADER", "MoabDBClient"]

REQUEST_HEADER: Final[str] = "x-req"

_LOGGER = get_json_logger(__name__)


class MoabDBClient:
    """Transport client for the MoabDB request endpoint."""

    def __init__(
        self,
        settings: MoabDBSettings | None = None,
        *,
        http: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            settings: Endpoint configuration. Defaults to ``MoabDBSettings()``
                read from the environment.
            http: Optional shared ``httpx.Client``. If omitted, a client is
                created and owned by this instance.
        """
        self._settings = settings or MoabDBSettings()
        self._url = str(self._settings.base_url)
        self._owns_client = http is None

        if http is not None:
            self._client = http
        elif self._settings.timeout_s is not None:
            self._client = httpx.Client(timeout=self._settings.timeout_s)
        else:
            self._client = httpx.Client()

    @property
    def url(self) -> str:
        """Endpoint every request is sent to."""
        return self._url

    def close(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def send(self, wire: str) -> Result[str, MoabError]:
        """Perform one GET carrying ``wire`` in the ``x-req`` header.

        Args:
            wire: Base64 text of a serialized request.

        Returns:
            ``Ok(body_text)`` whatever the HTTP status, or
            ``Err(MoabError.TRANSPORT_ERROR)``.
        """
        try:
            response = self._client.get(self._url, headers={REQUEST_HEADER: wire})
            body = response.content
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            _LOGGER.warning(
                "moabdb_transport_failed",
                extra={"extra": {"url": self._url, "error": type(exc).__name__}},
            )
            return Err(MoabError.TRANSPORT_ERROR)

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            _LOGGER.warning(
                "moabdb_transport_failed",
                extra={
                    "extra": {
                        "url": self._url,
                        "error": "non_utf8_body",
                        "http_status": response.status_code,
                    }
                },
            )
            return Err(MoabError.TRANSPORT_ERROR)

        return Ok(text)
