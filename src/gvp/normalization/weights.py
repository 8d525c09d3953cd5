"""Waste quantity buckets and their weight units (hath gadi)."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from gvp.normalization.aliases import resolve

WEIGHT_UNITS: Dict[str, float] = {
    "below_500_kg": 3.5,
    "some_100_kg": 1.0,
    "_500kg_1_tonne": 7.5,
    "above_1_tonne": 10.0,
}

_WHITESPACE = re.compile(r"\s+")


def bucket_token(value: Any) -> Optional[str]:
    """Lower-case ``value`` and replace whitespace runs with underscores."""
    if value is None:
        return None
    token = _WHITESPACE.sub("_", str(value).strip().lower())
    return token or None


def weight_of(bucket: Optional[str]) -> float:
    """Return the weight units for a bucket token, ``0`` when unknown."""
    return WEIGHT_UNITS.get(bucket or "", 0.0)


def resolve_quantity(raw: Mapping[str, Any]) -> Optional[str]:
    return bucket_token(resolve(raw, "waste_quantity"))
