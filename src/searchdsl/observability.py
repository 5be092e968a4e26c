"""Observability: structured logs (event, kind, latency_ms) and counters."""

from __future__ import annotations

import logging
from typing import Any

_LOGGER = logging.getLogger("searchdsl")

# Counters: serialized[kind] = count, errors[kind] = count
METRICS: dict[str, dict[str, int]] = {"serialized": {}, "errors": {}}


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return _LOGGER.getChild(name)
    return _LOGGER


def log_serialization(
    kind: str,
    latency_ms: float,
    error: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Emit a structured log line for one top-level serialization."""
    payload: dict[str, Any] = {
        "event": "serialize",
        "kind": kind,
        "latency_ms": round(latency_ms, 3),
    }
    if error:
        payload["error"] = error
    if extra:
        payload.update(extra)
    if error:
        _LOGGER.warning("serialize_failed", extra=payload)
    else:
        _LOGGER.debug("serialize", extra=payload)
    METRICS["serialized"][kind] = METRICS["serialized"].get(kind, 0) + 1
    if error:
        METRICS["errors"][kind] = METRICS["errors"].get(kind, 0) + 1


def metrics_snapshot() -> dict[str, dict[str, int]]:
    """Return a copy of the current counters."""
    return {k: dict(v) for k, v in METRICS.items()}


def reset_metrics() -> None:
    for counters in METRICS.values():
        counters.clear()
