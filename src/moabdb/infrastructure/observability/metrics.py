# src/moabdb/infrastructure/observability/metrics.py
# Copyright (c) MoabDB.
# SPDX-License-Identifier: MIT
"""MoabDB client Prometheus metrics.

Collectors (names are part of the public contract and must remain stable):

* ``moabdb_requests_total`` (Counter; labels ``datatype``, ``outcome``)
* ``moabdb_request_latency_seconds`` (Histogram; label ``datatype``)

``outcome`` is ``"success"`` or the :class:`~moabdb.domain.enums.errors.MoabError`
value of the failed call.

All collectors are created against the *current* default registry
(:data:`prometheus_client.REGISTRY`). If a collector with the same name already
exists there, the existing instance is reused instead of registering a
duplicate, so re-imports and registry swaps in tests are safe.
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import suppress
from typing import TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Histogram
from prometheus_client.registry import CollectorRegistry

__all__ = [
    "get_moabdb_request_latency_seconds",
    "get_moabdb_requests_total",
    "record_request",
]

_C = TypeVar("_C", Counter, Histogram)

_REQUESTS_TOTAL = "moabdb_requests_total"
_REQUEST_LATENCY = "moabdb_request_latency_seconds"


def _get_or_create(kind: type[_C], name: str, doc: str, labelnames: Sequence[str]) -> _C:
    """Return a collector of ``kind`` bound to the current default registry.

    1. Reuse an existing collector registered under ``name``.
    2. Otherwise register a new one.
    3. If a concurrent registration raised ``Duplicated timeseries``, look the
       collector up again and reuse it.
    """
    registry: CollectorRegistry = prom.REGISTRY
    # internal but stable in prometheus_client
    mapping = getattr(registry, "_names_to_collectors", {})
    existing = mapping.get(name)
    if isinstance(existing, kind):
        return existing

    try:
        return kind(name, doc, tuple(labelnames), registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            again = getattr(registry, "_names_to_collectors", {}).get(name)
            if isinstance(again, kind):
                return again
        raise


def get_moabdb_requests_total() -> Counter:
    """Counter of completed ``get_equity`` calls by datatype and outcome."""
    return _get_or_create(
        Counter,
        _REQUESTS_TOTAL,
        "MoabDB requests by datatype and outcome.",
        ("datatype", "outcome"),
    )


def get_moabdb_request_latency_seconds() -> Histogram:
    """Histogram of ``get_equity`` wall time by datatype."""
    return _get_or_create(
        Histogram,
        _REQUEST_LATENCY,
        "MoabDB request latency in seconds.",
        ("datatype",),
    )


def record_request(*, datatype: str, outcome: str, elapsed_s: float) -> None:
    """Record one finished call. Never raises."""
    with suppress(Exception):
        get_moabdb_requests_total().labels(datatype=datatype, outcome=outcome).inc()
        get_moabdb_request_latency_seconds().labels(datatype=datatype).observe(elapsed_s)
