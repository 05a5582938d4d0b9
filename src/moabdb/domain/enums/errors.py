# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""
MoabDB Error Kinds

Purpose:
    Closed, flat set of failure kinds returned (never raised) by the request
    orchestrator. Kinds carry no payload.

Layer: domain/enums
"""
from __future__ import annotations

from enum import Enum


class MoabError(str, Enum):
    """Failure kinds surfaced by :func:`moabdb.get_equity`.

    Attributes:
        SERVER_INTERNAL_ERROR: Server reported code 500.
        SERVER_TIMEOUT_ERROR: Reserved; not produced by the current mapping.
        DECODE_ERROR: Wire text or protobuf payload could not be decoded.
        REQUEST_ERROR: Server rejected the request (code 400), or the request
            could not be encoded and was never sent.
        TRANSPORT_ERROR: Network failure, unreadable body, or undecodable
            response/table payload.
        NOT_FOUND: Symbol or window has no data (code 404).
        UNAUTHORIZED: Missing or invalid credentials (code 401).
        UNKNOWN_ERROR: Any other server code.
    """

    SERVER_INTERNAL_ERROR = "server_internal_error"
    SERVER_TIMEOUT_ERROR = "server_timeout_error"
    DECODE_ERROR = "decode_error"
    REQUEST_ERROR = "request_error"
    TRANSPORT_ERROR = "transport_error"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN_ERROR = "unknown_error"

    def __str__(self) -> str:
        return self.value
