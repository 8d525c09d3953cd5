"""Survey pipeline holding the static and live snapshots and their merge.

Each channel (``static`` and ``live``) is refreshed independently. A caller
takes a ticket with :meth:`SurveyPipeline.begin_fetch` before starting a fetch
and hands it back with the result; a result whose ticket is older than the last
accepted one for that channel is dropped, so a slow response can never replace
a newer snapshot. The merged view is recomputed whenever a snapshot changes.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Dict, List, Optional, Sequence

from gvp.ingestion.live_feed import FeedResult, LiveFeedClient
from gvp.ingestion.static_dataset import load_static_dataset
from gvp.normalization.schema import NormalizedRecord
from gvp.observability import (
    Observability,
    get_observability,
    report_live_fetch,
    report_snapshot_accepted,
    report_snapshot_stale,
)
from gvp.services.dashboard import DashboardSummary, build_summary
from gvp.services.merge import merge_records
from gvp.settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)

STATIC_CHANNEL = "static"
LIVE_CHANNEL = "live"
CHANNELS = (STATIC_CHANNEL, LIVE_CHANNEL)


class SurveyPipeline:
    """Merge static and live survey snapshots and answer dashboard queries."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        observability: Observability | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._observability = observability or get_observability(component="pipeline", settings=self.settings)
        self._lock = threading.Lock()
        self._issued: Dict[str, int] = {channel: 0 for channel in CHANNELS}
        self._accepted: Dict[str, int] = {channel: 0 for channel in CHANNELS}
        self._snapshots: Dict[str, List[NormalizedRecord]] = {channel: [] for channel in CHANNELS}
        self._merged: List[NormalizedRecord] = []
        self._live_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Snapshot management
    # ------------------------------------------------------------------

    def begin_fetch(self, channel: str) -> int:
        """Issue a new ticket for ``channel``; tickets increase monotonically."""

        _check_channel(channel)
        with self._lock:
            self._issued[channel] += 1
            return self._issued[channel]

    def resolve_static(self, ticket: int, records: Sequence[NormalizedRecord]) -> bool:
        """Install a static snapshot fetched under ``ticket``."""

        return self._resolve(STATIC_CHANNEL, ticket, list(records), error=None)

    def resolve_live(self, ticket: int, result: FeedResult) -> bool:
        """Install a live-feed result fetched under ``ticket``.

        A failed fetch clears the live snapshot and records its error.
        """

        return self._resolve(LIVE_CHANNEL, ticket, list(result.records), error=result.error)

    def _resolve(
        self,
        channel: str,
        ticket: int,
        records: List[NormalizedRecord],
        *,
        error: Optional[str],
    ) -> bool:
        with self._lock:
            last_accepted = self._accepted[channel]
            stale = ticket <= last_accepted
            if not stale:
                self._accepted[channel] = ticket
                self._snapshots[channel] = records
                if channel == LIVE_CHANNEL:
                    self._live_error = error
                self._merged = merge_records(self._snapshots[STATIC_CHANNEL], self._snapshots[LIVE_CHANNEL])
                merged_count = len(self._merged)

        if stale:
            report_snapshot_stale(self._observability, channel=channel, ticket=ticket, last_accepted=last_accepted)
            return False

        report_snapshot_accepted(
            self._observability,
            channel=channel,
            ticket=ticket,
            records=len(records),
            merged=merged_count,
            error=error,
        )
        return True

    # ------------------------------------------------------------------
    # Refresh helpers
    # ------------------------------------------------------------------

    def refresh_static(self) -> bool:
        """Load the configured static dataset.

        Raises:
            DatasetLoadError: If the dataset file is unreadable.
        """

        ticket = self.begin_fetch(STATIC_CHANNEL)
        records = load_static_dataset(self.settings.static_dataset_path)
        return self.resolve_static(ticket, records)

    def refresh_live(self, client: LiveFeedClient | None = None) -> bool:
        """Fetch the live feed once and install the result."""

        if not self.settings.live_feed.enabled:
            LOGGER.info("Live feed disabled; skipping refresh")
            return False
        feed = client or LiveFeedClient.from_settings(self.settings)
        ticket = self.begin_fetch(LIVE_CHANNEL)
        started = time.perf_counter()
        result = feed.fetch()
        elapsed_ms = (time.perf_counter() - started) * 1000
        report_live_fetch(self._observability, elapsed_ms=elapsed_ms, failed=not result.ok)
        return self.resolve_live(ticket, result)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def records(self) -> List[NormalizedRecord]:
        """Merged records, static first."""

        with self._lock:
            return list(self._merged)

    @property
    def live_error(self) -> Optional[str]:
        """Error message from the last accepted live fetch, if it failed."""

        with self._lock:
            return self._live_error

    def snapshot(self, channel: str) -> List[NormalizedRecord]:
        _check_channel(channel)
        with self._lock:
            return list(self._snapshots[channel])

    def summary(
        self,
        *,
        city: Optional[str] = None,
        wards: Sequence[str] = (),
        selected: Optional[NormalizedRecord] = None,
    ) -> DashboardSummary:
        """Build the dashboard summary over the current merged records."""

        return build_summary(
            self.records,
            city=city if city is not None else self.settings.dataset.default_city,
            wards=wards,
            selected=selected,
            setting_top_n=self.settings.dataset.setting_top_n,
        )


def _check_channel(channel: str) -> None:
    if channel not in CHANNELS:
        raise ValueError(f"Unknown channel {channel!r}; expected one of {CHANNELS}")


def build_pipeline(settings: Settings | None = None, *, load_static: bool = True) -> SurveyPipeline:
    """Return a pipeline configured from settings, with the static snapshot loaded.

    Raises:
        DatasetLoadError: If ``load_static`` is set and the dataset is unreadable.
    """

    pipeline = SurveyPipeline(settings=settings)
    if load_static:
        pipeline.refresh_static()
    return pipeline


__all__ = ["CHANNELS", "LIVE_CHANNEL", "STATIC_CHANNEL", "SurveyPipeline", "build_pipeline"]
