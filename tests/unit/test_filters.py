"""Unit tests for dashboard record selection helpers."""

from __future__ import annotations

import pytest

from gvp.normalization.schema import NormalizedRecord
from gvp.services.filters import (
    KNOWN_CITIES,
    filter_records,
    records_with_coordinates,
    sort_by_ward,
    unique_wards,
    ward_color,
    ward_label,
)


@pytest.fixture
def records() -> list[NormalizedRecord]:
    return [
        NormalizedRecord(id="1", ward_number=13, city="Nagpur", latitude=1.0, longitude=2.0),
        NormalizedRecord(id="2", ward_number=12, city=" NAGPUR "),
        NormalizedRecord(id="3", ward_number=None, city="Pune", latitude=3.0, longitude=4.0),
        NormalizedRecord(id="4", ward_number=2, city="Nagpur", latitude=5.0),
        NormalizedRecord(id="5", ward_number=12, city="Nagpur"),
    ]


def _ids(records) -> list[str]:
    return [record.id for record in records]


def test_city_filter_is_case_insensitive_and_trimmed(records) -> None:
    assert _ids(filter_records(records, city="nagpur")) == ["1", "2", "4", "5"]
    assert _ids(filter_records(records, city="  Pune")) == ["3"]
    assert _ids(filter_records(records, city=None)) == ["1", "2", "3", "4", "5"]


def test_empty_ward_selection_keeps_all_wards(records) -> None:
    assert filter_records(records, wards=[]) == filter_records(records)


def test_ward_filter_matches_ward_labels(records) -> None:
    assert _ids(filter_records(records, wards=["12"])) == ["2", "5"]
    assert _ids(filter_records(records, wards=["12", "2"])) == ["2", "4", "5"]
    assert filter_records(records, wards=["99"]) == []


def test_unique_wards_sorted_numerically(records) -> None:
    assert unique_wards(records) == ["2", "12", "13"]


def test_sort_by_ward_puts_missing_last_and_is_stable(records) -> None:
    assert _ids(sort_by_ward(records)) == ["4", "2", "5", "1", "3"]


def test_records_with_coordinates(records) -> None:
    assert _ids(records_with_coordinates(records)) == ["1", "3"]


@pytest.mark.parametrize(
    "ward, color",
    [(12, "red"), (13, "green"), (14.0, "blue"), (15, "orange"), (16, "blue"), (None, "blue")],
)
def test_ward_color(ward, color) -> None:
    assert ward_color(ward) == color


def test_ward_label() -> None:
    assert ward_label(12.0) == "12"
    assert ward_label(12.5) == "12.5"
    assert ward_label(None) is None


def test_known_cities_include_default() -> None:
    assert "Nagpur" in KNOWN_CITIES
