"""HTTP client for the live form-submission feed.

The feed returns ``{"results": [...]}`` where every entry is one submission in
the form-export dialect. Failures never raise out of :meth:`LiveFeedClient.fetch`;
they come back as a :class:`FeedResult` with no records and an ``error`` message
suitable for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from gvp.normalization.normalizer import normalize_records
from gvp.normalization.schema import NormalizedRecord
from gvp.settings import Settings

LOGGER = logging.getLogger(__name__)


class FeedEnvelope(BaseModel):
    """Top-level response body of the live feed."""

    model_config = ConfigDict(extra="ignore")

    results: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _coerce_results(cls, value: Any) -> List[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]


@dataclass(slots=True)
class FeedResult:
    """Outcome of one live-feed fetch."""

    records: List[NormalizedRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LiveFeedClient:
    """Fetch and normalize submissions from the live feed."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        if not url:
            raise ValueError("LiveFeedClient requires a feed URL")
        self.url = url
        self._timeout = max(timeout_seconds, 1.0)
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, *, client: Optional[httpx.Client] = None) -> "LiveFeedClient":
        return cls(settings.live_feed.url, timeout_seconds=settings.live_feed.timeout_seconds, client=client)

    def _get(self) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self.url, timeout=self._timeout)
        with httpx.Client(timeout=self._timeout) as client:
            return client.get(self.url)

    def fetch(self) -> FeedResult:
        """Fetch the feed once.

        Returns:
            Normalized records on success; otherwise no records and an error of
            the form ``"API failure, status: <code>"`` or ``"API Error: <detail>"``.
        """

        try:
            response = self._get()
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.warning("Live feed %s returned status %s", self.url, status)
            return FeedResult(error=f"API failure, status: {status}")
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers bodies that are not JSON.
            LOGGER.warning("Live feed %s failed: %s", self.url, exc)
            return FeedResult(error=f"API Error: {exc}")

        if not isinstance(payload, dict):
            payload = {}
        envelope = FeedEnvelope.model_validate(payload)
        records = normalize_records(envelope.results)
        LOGGER.info("Fetched %d live survey records from %s", len(records), self.url)
        return FeedResult(records=records)


__all__ = ["FeedEnvelope", "FeedResult", "LiveFeedClient"]
