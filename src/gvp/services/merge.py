"""Cross-source merge and deduplication of normalized GVP records."""

from __future__ import annotations

from typing import Iterable, List, Set

from gvp.normalization.schema import NormalizedRecord


def _coordinate_key(value: float | None) -> str:
    # Adding 0.0 turns a rounded -0.0 into 0.0.
    return f"{round(value or 0.0, 6) + 0.0:.6f}"


def dedup_key(record: NormalizedRecord) -> str:
    """Return the identity key used to collapse duplicate points.

    Precedence: explicit id, then ward (cluster id), then latitude/longitude
    rounded to six decimals with missing coordinates treated as 0.
    """
    if record.id is not None:
        return f"id:{record.id}"
    if record.cluster_id is not None:
        return f"cluster:{record.cluster_id}"
    return f"loc:{_coordinate_key(record.latitude)}_{_coordinate_key(record.longitude)}"


def merge_records(*sources: Iterable[NormalizedRecord]) -> List[NormalizedRecord]:
    """Concatenate ``sources`` in order and keep the first record per key.

    Call as ``merge_records(static_records, live_records)`` so the cleaned
    export is authoritative over the live feed. Duplicates are dropped whole;
    fields from later duplicates are never merged into the kept record.
    """
    seen: Set[str] = set()
    merged: List[NormalizedRecord] = []
    for source in sources:
        for record in source:
            key = dedup_key(record)
            if key in seen:
                continue
            seen.add(key)
            merged.append(record)
    return merged
