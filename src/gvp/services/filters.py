"""Record selection helpers used by the dashboard views."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from gvp.normalization.schema import DEFAULT_CITY, NormalizedRecord

KNOWN_CITIES = ("Nagpur", "Pune", "Bangalore", "Andman and Nicobar Island")

DEFAULT_WARD_COLOR = "blue"
WARD_COLORS = {
    "12": "red",
    "13": "green",
    "14": "blue",
    "15": "orange",
}


def ward_label(ward: Optional[float]) -> Optional[str]:
    """Render a ward number the way surveyors write it (``12`` not ``12.0``)."""
    if ward is None:
        return None
    if isinstance(ward, float) and ward.is_integer():
        return str(int(ward))
    return str(ward)


def _city_key(city: Optional[str]) -> str:
    return (city or DEFAULT_CITY).strip().lower()


def filter_records(
    records: Iterable[NormalizedRecord],
    *,
    city: Optional[str] = DEFAULT_CITY,
    wards: Sequence[str] = (),
) -> List[NormalizedRecord]:
    """Select records for one city and, optionally, a set of wards.

    Args:
        records: Normalized records in display order.
        city: City to keep, compared case-insensitively after trimming. ``None``
            keeps every city.
        wards: Ward labels to keep; an empty selection keeps all wards.

    Returns:
        Matching records in their original order.
    """
    wanted_wards = {str(ward).strip() for ward in wards}
    selected: List[NormalizedRecord] = []
    for record in records:
        if city is not None and _city_key(record.city) != _city_key(city):
            continue
        if wanted_wards and ward_label(record.ward_number) not in wanted_wards:
            continue
        selected.append(record)
    return selected


def unique_wards(records: Iterable[NormalizedRecord]) -> List[str]:
    """Distinct ward labels sorted numerically."""
    wards = {record.ward_number for record in records if record.ward_number is not None}
    return [ward_label(ward) for ward in sorted(wards)]


def sort_by_ward(records: Iterable[NormalizedRecord]) -> List[NormalizedRecord]:
    """Stable sort by ward number with records lacking a ward placed last."""
    return sorted(
        records,
        key=lambda record: (record.ward_number is None, record.ward_number or 0),
    )


def records_with_coordinates(records: Iterable[NormalizedRecord]) -> List[NormalizedRecord]:
    """Records that can be plotted on a map."""
    return [record for record in records if record.has_coordinates]


def ward_color(ward: Optional[float]) -> str:
    return WARD_COLORS.get(ward_label(ward) or "", DEFAULT_WARD_COLOR)


__all__ = [
    "KNOWN_CITIES",
    "filter_records",
    "records_with_coordinates",
    "sort_by_ward",
    "unique_wards",
    "ward_color",
    "ward_label",
]
