# src/moabdb/infrastructure/external_apis/moabdb/protocol.py
# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""MoabDB wire protocol.

The request travels as a single ``x-req`` header and the response comes back
as the body text. Both directions use the same two layers:

* **Codec**: protobuf (proto2) messages with every field ``required``, so
  empty strings are still put on the wire and a payload missing a field is
  rejected. Unknown fields are skipped, which keeps the schema open to
  additive changes.
* **Framing**: standard, padded base64 so the bytes fit in a header value.

The ``.proto`` schema is assembled at import time from a
``FileDescriptorProto``; there is no generated ``_pb2`` module::

    message Request {
        required string symbol = 1;
        required uint32 start = 2;
        required uint32 end = 3;
        required string datatype = 4;
        required string username = 5;
        required string token = 6;
    }

    message Response {
        required int32 code = 1;
        required bytes data = 2;
    }
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Final

from google.protobuf import descriptor_pb2, descriptor_pool, message, message_factory

from moabdb.domain.enums.errors import MoabError
from moabdb.domain.results import Err, Ok, Result

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "U32_MAX",
    "Request",
    "Response",
    "decode_request",
    "decode_response",
    "encode_request",
    "encode_response",
    "from_text",
    "from_wire",
    "request_from_wire",
    "response_to_wire",
    "to_text",
    "to_wire",
]

U32_MAX: Final[int] = 0xFFFFFFFF
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1

_PACKAGE: Final[str] = "moabdb.v1"
_FDP = descriptor_pb2.FieldDescriptorProto

_REQUEST_FIELDS: Final[tuple[tuple[str, int], ...]] = (
    ("symbol", _FDP.TYPE_STRING),
    ("start", _FDP.TYPE_UINT32),
    ("end", _FDP.TYPE_UINT32),
    ("datatype", _FDP.TYPE_STRING),
    ("username", _FDP.TYPE_STRING),
    ("token", _FDP.TYPE_STRING),
)
_RESPONSE_FIELDS: Final[tuple[tuple[str, int], ...]] = (
    ("code", _FDP.TYPE_INT32),
    ("data", _FDP.TYPE_BYTES),
)


def _build_schema() -> tuple[type[message.Message], type[message.Message]]:
    """Register the protocol schema in a private pool and return its message classes."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="moabdb/v1/protocol.proto",
        package=_PACKAGE,
        syntax="proto2",
    )
    for type_name, fields in (("Request", _REQUEST_FIELDS), ("Response", _RESPONSE_FIELDS)):
        msg = file_proto.message_type.add(name=type_name)
        # Field numbers follow declaration order, starting at 1.
        for number, (name, kind) in enumerate(fields, start=1):
            msg.field.add(name=name, number=number, type=kind, label=_FDP.LABEL_REQUIRED)

    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return (
        message_factory.GetMessageClass(pool.FindMessageTypeByName(f"{_PACKAGE}.Request")),
        message_factory.GetMessageClass(pool.FindMessageTypeByName(f"{_PACKAGE}.Response")),
    )


_RequestMessage, _ResponseMessage = _build_schema()


@dataclass(frozen=True, slots=True)
class Request:
    """One data request.

    Attributes:
        symbol: Ticker symbol.
        start: Window start, Unix seconds in the u32 range.
        end: Window end, Unix seconds in the u32 range.
        datatype: Dataset selector (``daily_stocks`` or ``intraday_stocks``).
        username: Account identity; empty when unauthenticated.
        token: API token; empty when unauthenticated.
    """

    symbol: str
    start: int
    end: int
    datatype: str
    username: str = ""
    token: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if not 0 <= value <= U32_MAX:
                raise ValueError(f"Request.{name} must fit in an unsigned 32-bit integer.")


@dataclass(frozen=True, slots=True)
class Response:
    """Server reply: application status ``code`` and the raw ``data`` payload."""

    code: int
    data: bytes = b""

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.code <= INT32_MAX:
            raise ValueError("Response.code must fit in a signed 32-bit integer.")


# --------------------------------------------------------------------------- #
# Codec (structured <-> bytes)
# --------------------------------------------------------------------------- #


def _serialize(msg: message.Message) -> bytes:
    return msg.SerializeToString(deterministic=True)


def _parse(cls: type[message.Message], data: bytes) -> message.Message | None:
    """Parse ``data`` into ``cls``; ``None`` when malformed or incomplete."""
    msg = cls()
    try:
        msg.ParseFromString(data)
    except message.DecodeError:
        return None
    if not msg.IsInitialized():
        return None
    return msg


def encode_request(request: Request) -> bytes:
    """Serialize a :class:`Request` to protobuf bytes."""
    return _serialize(
        _RequestMessage(
            symbol=request.symbol,
            start=request.start,
            end=request.end,
            datatype=request.datatype,
            username=request.username,
            token=request.token,
        )
    )


def decode_request(data: bytes) -> Result[Request, MoabError]:
    """Deserialize protobuf bytes into a :class:`Request`."""
    msg: Any = _parse(_RequestMessage, data)
    if msg is None:
        return Err(MoabError.DECODE_ERROR)
    return Ok(
        Request(
            symbol=msg.symbol,
            start=msg.start,
            end=msg.end,
            datatype=msg.datatype,
            username=msg.username,
            token=msg.token,
        )
    )


def encode_response(response: Response) -> bytes:
    """Serialize a :class:`Response` to protobuf bytes."""
    return _serialize(_ResponseMessage(code=response.code, data=response.data))


def decode_response(data: bytes) -> Result[Response, MoabError]:
    """Deserialize protobuf bytes into a :class:`Response`."""
    msg: Any = _parse(_ResponseMessage, data)
    if msg is None:
        return Err(MoabError.DECODE_ERROR)
    return Ok(Response(code=msg.code, data=bytes(msg.data)))


# --------------------------------------------------------------------------- #
# Framing (bytes <-> header-safe text)
# --------------------------------------------------------------------------- #


def to_text(data: bytes) -> str:
    """Encode bytes as standard padded base64 text."""
    return base64.b64encode(data).decode("ascii")


def from_text(text: str) -> Result[bytes, MoabError]:
    """Decode base64 text produced by :func:`to_text`.

    Surrounding whitespace (e.g. a trailing newline in a body) is ignored;
    any other character outside the base64 alphabet is rejected.
    """
    try:
        return Ok(base64.b64decode(text.strip(), validate=True))
    except ValueError:
        # binascii.Error, or non-ASCII input.
        return Err(MoabError.DECODE_ERROR)


# --------------------------------------------------------------------------- #
# Composed wire helpers
# --------------------------------------------------------------------------- #


def to_wire(request: Request) -> str:
    """Return the ``x-req`` header value for ``request``."""
    return to_text(encode_request(request))


def from_wire(text: str) -> Result[Response, MoabError]:
    """Decode a response body into a :class:`Response`."""
    match from_text(text):
        case Ok(data):
            return decode_response(data)
        case err:
            return err


def response_to_wire(response: Response) -> str:
    """Return the body text a server would send for ``response``."""
    return to_text(encode_response(response))


def request_from_wire(text: str) -> Result[Request, MoabError]:
    """Decode an ``x-req`` header value into a :class:`Request`."""
    match from_text(text):
        case Ok(data):
            return decode_request(data)
        case err:
            return err
