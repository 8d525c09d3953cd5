"""Structured events and StatsD metrics for the survey pipeline.

Components receive an :class:`Observability` by injection. The ``report_*``
helpers own the pipeline's event names, metric names and tags so callers only
pass domain values; they accept any object with ``emit_event``, ``increment``
and ``record_timing``.
"""

from __future__ import annotations

import json
import logging
import socket
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Mapping, Protocol

from gvp.settings import Settings, get_settings

_LOGGER = logging.getLogger("gvp.observability")

SNAPSHOT_ACCEPTED = "pipeline.snapshot.accepted"
SNAPSHOT_STALE = "pipeline.snapshot.stale"
LIVE_FETCH_MS = "pipeline.live.fetch_ms"
LIVE_FEED_ERROR = "pipeline.live.error"


class Observer(Protocol):
    def emit_event(self, event: str, **fields: Any) -> None: ...

    def increment(self, metric: str, *, value: float = 1.0, tags: Mapping[str, str] | None = None) -> None: ...

    def record_timing(self, metric: str, value_ms: float, *, tags: Mapping[str, str] | None = None) -> None: ...


class StatsdSink:
    """Fire-and-forget UDP sender for StatsD lines."""

    def __init__(self, host: str, port: int, prefix: str = "") -> None:
        self.address = (host, port)
        self.prefix = prefix
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def send(self, metric: str, value: float, *, metric_type: str, tags: Mapping[str, str] | None = None) -> None:
        line = statsd_line(metric, value, metric_type=metric_type, prefix=self.prefix, tags=tags)
        try:
            self._socket.sendto(line.encode("utf-8"), self.address)
        except OSError:
            _LOGGER.debug("Dropped StatsD line %s", line, exc_info=True)


def statsd_line(
    metric: str,
    value: float,
    *,
    metric_type: str,
    prefix: str = "",
    tags: Mapping[str, str] | None = None,
) -> str:
    """Format one DogStatsD-style line, e.g. ``gvp.pipeline.live.fetch_ms:12.5|ms|#outcome:ok``."""
    name = f"{prefix}.{metric}" if prefix else metric
    number = f"{value:.6f}".rstrip("0").rstrip(".") or "0"
    line = f"{name}:{number}|{metric_type}"
    if tags:
        line += "|#" + ",".join(f"{key}:{tags[key]}" for key in sorted(tags))
    return line


class Observability:
    """Log structured events and forward counters and timings to StatsD."""

    def __init__(
        self,
        *,
        settings: Settings,
        component: str | None = None,
        metrics_backend: StatsdSink | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.component = component or "core"
        self._logger = logger or _LOGGER
        self._structured = bool(settings.observability.structured_logging)
        self._metrics = metrics_backend

    def emit_event(self, event: str, **fields: Any) -> None:
        payload = {
            "event": event,
            "component": self.component,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        payload.update(fields)
        if self._structured:
            self._logger.info(json.dumps(payload, default=_jsonable))
        else:
            self._logger.info("%s | %s", event, payload)

    def increment(self, metric: str, *, value: float = 1.0, tags: Mapping[str, str] | None = None) -> None:
        if self._metrics is not None:
            self._metrics.send(metric, value, metric_type="c", tags=_clean_tags(tags))

    def record_timing(self, metric: str, value_ms: float, *, tags: Mapping[str, str] | None = None) -> None:
        if self._metrics is not None:
            self._metrics.send(metric, value_ms, metric_type="ms", tags=_clean_tags(tags))


def report_snapshot_accepted(
    observer: Observer,
    *,
    channel: str,
    ticket: int,
    records: int,
    merged: int,
    error: str | None = None,
) -> None:
    """Record that a channel snapshot replaced the previous one."""
    observer.emit_event(SNAPSHOT_ACCEPTED, channel=channel, ticket=ticket, records=records, merged=merged, error=error)
    observer.increment(SNAPSHOT_ACCEPTED, tags={"channel": channel})
    if error:
        observer.increment(LIVE_FEED_ERROR, tags={"channel": channel})


def report_snapshot_stale(observer: Observer, *, channel: str, ticket: int, last_accepted: int) -> None:
    """Record a snapshot dropped because a newer one was already accepted."""
    _LOGGER.info("Dropping stale %s snapshot (ticket %d, last accepted %d)", channel, ticket, last_accepted)
    observer.increment(SNAPSHOT_STALE, tags={"channel": channel})


def report_live_fetch(observer: Observer, *, elapsed_ms: float, failed: bool) -> None:
    observer.record_timing(LIVE_FETCH_MS, elapsed_ms, tags={"outcome": "error" if failed else "ok"})


@lru_cache(maxsize=4)
def _shared_sink(host: str, port: int, prefix: str) -> StatsdSink:
    return StatsdSink(host, port, prefix)


def get_observability(*, component: str | None = None, settings: Settings | None = None) -> Observability:
    """Return an :class:`Observability` wired to the configured StatsD host, if any."""

    resolved = settings or get_settings()
    options = resolved.observability
    sink = _shared_sink(options.statsd_host, options.statsd_port, options.statsd_prefix) if options.statsd_host else None
    return Observability(settings=resolved, component=component, metrics_backend=sink)


def reset_observability_cache() -> None:
    """Forget shared StatsD sinks (used in tests)."""

    _shared_sink.cache_clear()


def _jsonable(value: Any) -> Any:
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def _clean_tags(tags: Mapping[str, str] | None) -> Mapping[str, str] | None:
    cleaned = {str(key): str(value) for key, value in (tags or {}).items() if value is not None}
    return cleaned or None


__all__ = [
    "LIVE_FEED_ERROR",
    "LIVE_FETCH_MS",
    "SNAPSHOT_ACCEPTED",
    "SNAPSHOT_STALE",
    "Observability",
    "StatsdSink",
    "get_observability",
    "report_live_fetch",
    "report_snapshot_accepted",
    "report_snapshot_stale",
    "reset_observability_cache",
    "statsd_line",
]
