# tests/unit/infrastructure/logging/test_logger.py
from __future__ import annotations

import json
import logging
import sys
from collections.abc import Generator

import pytest

from moabdb.infrastructure.logging.logger import (
    REDACTED,
    _JsonFormatter,  # internal but importable
    configure_root_logging,
    get_json_logger,
)


@pytest.fixture
def restore_root() -> Generator[logging.Logger, None, None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _format(msg: str, level: int = logging.INFO, **attrs: object) -> dict:
    """Build a record, attach attributes and return the parsed JSON payload."""
    logger = logging.getLogger("test.logger")
    record = logger.makeRecord(
        name=logger.name,
        level=level,
        fn="test_logger",
        lno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return json.loads(_JsonFormatter().format(record))


def test_configure_root_logging_installs_json_handler(
    monkeypatch: pytest.MonkeyPatch, restore_root: logging.Logger
) -> None:
    """Root logger should get a JSON formatter and respect LOG_LEVEL."""
    monkeypatch.setenv("LOG_LEVEL", "debug")
    restore_root.handlers.clear()

    configure_root_logging()

    assert restore_root.level == logging.DEBUG
    assert len(restore_root.handlers) == 1
    assert isinstance(restore_root.handlers[0].formatter, _JsonFormatter)


def test_configure_root_logging_is_idempotent(restore_root: logging.Logger) -> None:
    restore_root.handlers.clear()

    configure_root_logging("WARNING")
    configure_root_logging("WARNING")

    assert len(restore_root.handlers) == 1
    assert restore_root.level == logging.WARNING


def test_json_formatter_basic_fields() -> None:
    payload = _format("hello-world")

    assert payload["message"] == "hello-world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert "ts" in payload


def test_json_formatter_merges_structured_extra() -> None:
    payload = _format("moabdb_response_error", extra={"code": 404, "error": "not_found"})

    assert payload["code"] == 404
    assert payload["error"] == "not_found"


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        exc_info = sys.exc_info()

    logger = logging.getLogger("test.logger.exc")
    record = logger.makeRecord(logger.name, logging.ERROR, "f", 1, "failure", (), exc_info)
    payload = json.loads(_JsonFormatter().format(record))

    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def test_json_formatter_tags_library() -> None:
    assert _format("hello")["library"] == "moabdb"


def test_json_formatter_masks_credentials_in_extra() -> None:
    payload = _format(
        "moabdb_request_sent",
        extra={"symbol": "AAPL", "token": "secret", "Username": "me", "x-req": "CgRBQVBM"},
    )

    assert payload["symbol"] == "AAPL"
    assert payload["token"] == REDACTED
    assert payload["Username"] == REDACTED
    assert payload["x-req"] == REDACTED
    assert "secret" not in json.dumps(payload)


def test_json_formatter_extra_cannot_overwrite_reserved_keys() -> None:
    payload = _format("real-message", extra={"message": "spoofed", "library": "other"})

    assert payload["message"] == "real-message"
    assert payload["library"] == "moabdb"


def test_configure_root_logging_ignores_foreign_handlers(restore_root: logging.Logger) -> None:
    restore_root.handlers[:] = [logging.NullHandler()]

    configure_root_logging("INFO")
    configure_root_logging("INFO")

    json_handlers = [h for h in restore_root.handlers if isinstance(h.formatter, _JsonFormatter)]
    assert len(json_handlers) == 1
    assert len(restore_root.handlers) == 2


def test_get_json_logger_does_not_attach_handlers() -> None:
    logger = get_json_logger("moabdb.tests.sample")

    assert logger is logging.getLogger("moabdb.tests.sample")
    assert logger.handlers == []
