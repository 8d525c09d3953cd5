"""Unit tests for observability helpers."""

from __future__ import annotations

import json
import logging

from gvp.observability import (
    LIVE_FEED_ERROR,
    LIVE_FETCH_MS,
    SNAPSHOT_ACCEPTED,
    SNAPSHOT_STALE,
    Observability,
    StatsdSink,
    get_observability,
    report_live_fetch,
    report_snapshot_accepted,
    report_snapshot_stale,
    reset_observability_cache,
    statsd_line,
)
from gvp.settings import Settings


class _RecordingSink:
    def __init__(self) -> None:
        self.sent: list[tuple[str, float, str, dict[str, str] | None]] = []

    def send(self, metric: str, value: float, *, metric_type: str, tags=None) -> None:
        self.sent.append((metric, value, metric_type, tags))


class _SpyObservability:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []
        self.counters: list[tuple[str, float, dict[str, str] | None]] = []
        self.timings: list[tuple[str, float, dict[str, str] | None]] = []

    def emit_event(self, event: str, **fields: object) -> None:
        self.events.append((event, dict(fields)))

    def increment(self, metric: str, *, value: float = 1.0, tags: dict[str, str] | None = None) -> None:
        self.counters.append((metric, value, tags))

    def record_timing(self, metric: str, value_ms: float, *, tags: dict[str, str] | None = None) -> None:
        self.timings.append((metric, value_ms, tags))


def test_emit_event_writes_structured_json(caplog) -> None:
    caplog.set_level(logging.INFO, logger="gvp.observability")
    obs = Observability(settings=Settings(), component="pipeline")

    obs.emit_event(SNAPSHOT_ACCEPTED, channel="live", labels=frozenset({"a"}))

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == SNAPSHOT_ACCEPTED
    assert payload["component"] == "pipeline"
    assert payload["channel"] == "live"
    assert payload["labels"] == ["a"]


def test_emit_event_plain_text_when_structured_logging_disabled(caplog) -> None:
    caplog.set_level(logging.INFO, logger="gvp.observability")
    obs = Observability(settings=Settings(observability={"structured_logging": False}))

    obs.emit_event("feed.fetched", records=3)

    assert caplog.records[-1].getMessage().startswith("feed.fetched | ")


def test_metrics_are_forwarded_to_sink() -> None:
    sink = _RecordingSink()
    obs = Observability(settings=Settings(), metrics_backend=sink)

    obs.increment(SNAPSHOT_ACCEPTED, tags={"channel": "static", "empty": None})
    obs.record_timing(LIVE_FETCH_MS, 12.5)

    assert sink.sent == [
        (SNAPSHOT_ACCEPTED, 1.0, "c", {"channel": "static"}),
        (LIVE_FETCH_MS, 12.5, "ms", None),
    ]


def test_metrics_are_noops_without_statsd_host() -> None:
    reset_observability_cache()
    obs = get_observability(component="test", settings=Settings(observability={"statsd_host": None}))

    obs.increment("anything")
    obs.record_timing("anything", 1.0)

    assert obs.component == "test"


def test_statsd_sink_is_shared_per_host() -> None:
    reset_observability_cache()
    settings = Settings(observability={"statsd_host": "127.0.0.1", "statsd_port": 9125})

    first = get_observability(component="a", settings=settings)
    second = get_observability(component="b", settings=settings)

    assert first._metrics is second._metrics
    assert isinstance(first._metrics, StatsdSink)
    assert first._metrics.address == ("127.0.0.1", 9125)
    reset_observability_cache()


def test_statsd_line_format() -> None:
    assert statsd_line(LIVE_FETCH_MS, 12.5, metric_type="ms", prefix="gvp", tags={"outcome": "ok"}) == (
        "gvp.pipeline.live.fetch_ms:12.5|ms|#outcome:ok"
    )
    assert statsd_line("count", 3.0, metric_type="c") == "count:3|c"
    assert statsd_line("zero", 0.0, metric_type="c", tags={"b": "2", "a": "1"}) == "zero:0|c|#a:1,b:2"


def test_statsd_sink_sends_formatted_line(monkeypatch) -> None:
    sent: list[tuple[bytes, tuple[str, int]]] = []
    sink = StatsdSink("127.0.0.1", 8125, prefix="gvp")

    class _Socket:
        def sendto(self, data: bytes, address: tuple[str, int]) -> None:
            sent.append((data, address))

    monkeypatch.setattr(sink, "_socket", _Socket())

    sink.send(SNAPSHOT_STALE, 1.0, metric_type="c", tags={"channel": "live"})

    assert sent == [(b"gvp.pipeline.snapshot.stale:1|c|#channel:live", ("127.0.0.1", 8125))]


def test_report_snapshot_accepted_counts_feed_errors() -> None:
    spy = _SpyObservability()

    report_snapshot_accepted(spy, channel="live", ticket=3, records=0, merged=5, error="API failure, status: 500")

    assert spy.events == [
        (SNAPSHOT_ACCEPTED, {"channel": "live", "ticket": 3, "records": 0, "merged": 5, "error": "API failure, status: 500"})
    ]
    assert [metric for metric, _, _ in spy.counters] == [SNAPSHOT_ACCEPTED, LIVE_FEED_ERROR]


def test_report_snapshot_stale_logs_and_counts(caplog) -> None:
    caplog.set_level(logging.INFO, logger="gvp.observability")
    spy = _SpyObservability()

    report_snapshot_stale(spy, channel="static", ticket=1, last_accepted=2)

    assert spy.counters == [(SNAPSHOT_STALE, 1.0, {"channel": "static"})]
    assert "Dropping stale static snapshot (ticket 1, last accepted 2)" in caplog.text


def test_report_live_fetch_tags_outcome() -> None:
    spy = _SpyObservability()

    report_live_fetch(spy, elapsed_ms=4.0, failed=True)
    report_live_fetch(spy, elapsed_ms=2.0, failed=False)

    assert spy.timings == [(LIVE_FETCH_MS, 4.0, {"outcome": "error"}), (LIVE_FETCH_MS, 2.0, {"outcome": "ok"})]
