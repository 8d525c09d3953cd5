"""Dashboard summary: headline totals plus one series per taxonomy dimension."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from gvp.normalization.schema import DEFAULT_CITY, NormalizedRecord
from gvp.services.aggregation import DIMENSIONS, AggregatedSeries, summarize
from gvp.services.filters import filter_records

DEFAULT_SETTING_TOP_N = 5


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the dashboard cards and charts render for one selection.

    Attributes:
        total_points: Number of records matching the city and ward filters.
        total_waste_volume: Sum of weight units over the selected record, or
            over the filtered records when nothing is selected.
        series: Aggregated series keyed by dimension name.
        selected: Record the user drilled into, if any.
    """

    total_points: int
    total_waste_volume: float
    series: Dict[str, AggregatedSeries] = field(default_factory=dict)
    selected: Optional[NormalizedRecord] = None

    def __getitem__(self, dimension: str) -> AggregatedSeries:
        return self.series[dimension]


def total_waste_volume(records: Iterable[NormalizedRecord]) -> float:
    return sum(record.waste_weight_units for record in records)


def build_summary(
    records: Sequence[NormalizedRecord],
    *,
    city: Optional[str] = DEFAULT_CITY,
    wards: Sequence[str] = (),
    selected: Optional[NormalizedRecord] = None,
    setting_top_n: int = DEFAULT_SETTING_TOP_N,
) -> DashboardSummary:
    """Filter ``records`` and compute every dashboard series.

    Args:
        records: Merged, normalized records.
        city: City filter; see :func:`gvp.services.filters.filter_records`.
        wards: Ward filter; empty keeps all wards.
        selected: Record picked in the table; switches every chart to drill-down.
        setting_top_n: Number of settings kept in the setting chart.
    """
    filtered = filter_records(records, city=city, wards=wards)
    in_scope = [selected] if selected is not None else filtered

    series: Dict[str, AggregatedSeries] = {}
    for name, dimension in DIMENSIONS.items():
        limit = setting_top_n if name == "setting" else None
        series[name] = summarize(filtered, dimension, selected=selected, limit=limit)

    return DashboardSummary(
        total_points=len(filtered),
        total_waste_volume=total_waste_volume(in_scope),
        series=series,
        selected=selected,
    )


__all__ = ["DashboardSummary", "build_summary", "total_waste_volume"]
