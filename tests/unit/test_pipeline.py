"""Unit tests for the survey pipeline."""

from __future__ import annotations

import json

import pytest

from gvp.ingestion.live_feed import FeedResult
from gvp.ingestion.static_dataset import DatasetLoadError
from gvp.normalization.schema import NormalizedRecord
from gvp.services.pipeline import LIVE_CHANNEL, STATIC_CHANNEL, SurveyPipeline, build_pipeline
from gvp.settings import Settings


class _SpyObservability:
    """Captures observability interactions for assertions."""

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


class _StubFeed:
    def __init__(self, result: FeedResult) -> None:
        self.result = result
        self.calls = 0

    def fetch(self) -> FeedResult:
        self.calls += 1
        return self.result


@pytest.fixture
def spy() -> _SpyObservability:
    return _SpyObservability()


@pytest.fixture
def pipeline(spy) -> SurveyPipeline:
    return SurveyPipeline(settings=Settings(), observability=spy)


def test_static_records_win_over_live_duplicates(pipeline) -> None:
    static = [NormalizedRecord(id="42", ward_number=12)]
    live = [NormalizedRecord(id="42", ward_number=13), NormalizedRecord(id="43", ward_number=13)]

    pipeline.resolve_live(pipeline.begin_fetch(LIVE_CHANNEL), FeedResult(records=live))
    pipeline.resolve_static(pipeline.begin_fetch(STATIC_CHANNEL), static)

    assert [(record.id, record.ward_number) for record in pipeline.records] == [("42", 12), ("43", 13)]


def test_stale_live_snapshot_is_dropped(pipeline, spy) -> None:
    older = pipeline.begin_fetch(LIVE_CHANNEL)
    newer = pipeline.begin_fetch(LIVE_CHANNEL)

    assert pipeline.resolve_live(newer, FeedResult(records=[NormalizedRecord(id="new")]))
    assert not pipeline.resolve_live(older, FeedResult(records=[NormalizedRecord(id="old")]))

    assert [record.id for record in pipeline.records] == ["new"]
    assert ("pipeline.snapshot.stale", 1.0, {"channel": "live"}) in spy.counters


def test_tickets_are_per_channel(pipeline) -> None:
    assert pipeline.begin_fetch(LIVE_CHANNEL) == 1
    assert pipeline.begin_fetch(LIVE_CHANNEL) == 2
    assert pipeline.begin_fetch(STATIC_CHANNEL) == 1


def test_replaying_an_accepted_ticket_is_rejected(pipeline) -> None:
    ticket = pipeline.begin_fetch(STATIC_CHANNEL)

    assert pipeline.resolve_static(ticket, [NormalizedRecord(id="a")])
    assert not pipeline.resolve_static(ticket, [NormalizedRecord(id="b")])
    assert pipeline.snapshot(STATIC_CHANNEL) == [NormalizedRecord(id="a")]


def test_fetch_failure_clears_live_channel_and_surfaces_error(pipeline, spy) -> None:
    pipeline.resolve_static(pipeline.begin_fetch(STATIC_CHANNEL), [NormalizedRecord(id="s")])
    pipeline.refresh_live(_StubFeed(FeedResult(records=[NormalizedRecord(id="l")])))
    assert pipeline.live_error is None

    pipeline.refresh_live(_StubFeed(FeedResult(error="API failure, status: 500")))

    assert pipeline.live_error == "API failure, status: 500"
    assert pipeline.snapshot(LIVE_CHANNEL) == []
    assert [record.id for record in pipeline.records] == ["s"]
    assert spy.timings[-1][0] == "pipeline.live.fetch_ms"
    assert spy.timings[-1][2] == {"outcome": "error"}


def test_successful_refresh_clears_previous_error(pipeline) -> None:
    pipeline.refresh_live(_StubFeed(FeedResult(error="API Error: timeout")))
    pipeline.refresh_live(_StubFeed(FeedResult(records=[NormalizedRecord(id="x")])))

    assert pipeline.live_error is None
    assert [record.id for record in pipeline.records] == ["x"]


def test_accepted_snapshot_emits_event(pipeline, spy) -> None:
    pipeline.resolve_static(pipeline.begin_fetch(STATIC_CHANNEL), [NormalizedRecord(id="a")])

    event, fields = spy.events[-1]
    assert event == "pipeline.snapshot.accepted"
    assert fields["channel"] == "static"
    assert fields["merged"] == 1


def test_disabled_live_feed_is_not_fetched(spy) -> None:
    pipeline = SurveyPipeline(settings=Settings(live_feed={"enabled": False}), observability=spy)
    feed = _StubFeed(FeedResult(records=[NormalizedRecord(id="x")]))

    assert pipeline.refresh_live(feed) is False
    assert feed.calls == 0


def test_unknown_channel_raises(pipeline) -> None:
    with pytest.raises(ValueError):
        pipeline.begin_fetch("cache")


def test_summary_uses_configured_defaults(pipeline) -> None:
    pipeline.resolve_static(
        pipeline.begin_fetch(STATIC_CHANNEL),
        [
            NormalizedRecord(id="a", ward_number=12, waste_weight_units=1.0),
            NormalizedRecord(id="b", ward_number=13, city="Pune", waste_weight_units=2.0),
        ],
    )

    summary = pipeline.summary()

    assert summary.total_points == 1
    assert summary.total_waste_volume == 1.0
    assert pipeline.summary(city="Pune").total_points == 1


def test_build_pipeline_loads_static_dataset(tmp_path) -> None:
    path = tmp_path / "cleaned.json"
    path.write_text(json.dumps([{"GVP_ID": "p1", "GVP Ward": 12}]), encoding="utf-8")

    pipeline = build_pipeline(Settings(dataset={"static_path": str(path)}))

    assert [record.id for record in pipeline.records] == ["p1"]


def test_build_pipeline_propagates_dataset_errors(tmp_path) -> None:
    with pytest.raises(DatasetLoadError):
        build_pipeline(Settings(dataset={"static_path": str(tmp_path / "absent.json")}))
