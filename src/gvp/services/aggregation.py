"""Percentage-distribution series over one taxonomy dimension.

Each dashboard chart is an :class:`AggregatedSeries` computed from a set of
normalized records and a :class:`Dimension` (the label universe plus a function
extracting the labels a record carries). Percentages are shares of the total
number of label occurrences, not of the number of records, because one record
may carry several labels.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from gvp.normalization.schema import (
    Disposer,
    NormalizedRecord,
    Problem,
    Reason,
    Setting,
    Solution,
    WasteType,
)


@dataclass(frozen=True)
class Dimension:
    """Label universe and extractor for one aggregated taxonomy."""

    name: str
    labels: Type[Enum]
    extract: Callable[[NormalizedRecord], Iterable[Enum]]

    @property
    def ordered_labels(self) -> Tuple[Enum, ...]:
        return tuple(self.labels)


@dataclass(frozen=True)
class SeriesEntry:
    """One labeled value of a series."""

    label: Enum
    value: float

    @property
    def name(self) -> str:
        return self.label.value


@dataclass(frozen=True)
class AggregatedSeries:
    """Ordered series for one dimension.

    Attributes:
        dimension: Name of the aggregated dimension.
        entries: Entries sorted by value descending, ties in declared label order.
        total: Number of label occurrences counted.
        drill_down: True when the series describes a single selected record; each
            entry then has value ``1``.
    """

    dimension: str
    entries: Tuple[SeriesEntry, ...]
    total: int
    drill_down: bool = False

    def as_pairs(self) -> List[Tuple[str, float]]:
        return [(entry.name, entry.value) for entry in self.entries]

    def display_rows(self) -> List[Tuple[str, str]]:
        """Return (label, percentage text) rows; a drill-down entry reads 100%."""
        if self.drill_down:
            return [(entry.name, "100%") for entry in self.entries]
        return [(entry.name, f"{entry.value:.1f}%") for entry in self.entries]

    def value_of(self, label: Enum) -> Optional[float]:
        for entry in self.entries:
            if entry.label is label:
                return entry.value
        return None


DIMENSIONS: Dict[str, Dimension] = {
    "waste_type": Dimension("waste_type", WasteType, lambda record: record.waste_types),
    "disposer": Dimension("disposer", Disposer, lambda record: record.disposers),
    "reason": Dimension("reason", Reason, lambda record: record.reasons),
    "problem": Dimension("problem", Problem, lambda record: record.problems),
    "solution": Dimension("solution", Solution, lambda record: record.solutions),
    "setting": Dimension("setting", Setting, lambda record: (record.setting,)),
}


def get_dimension(name: str) -> Dimension:
    """Look up a dimension by name.

    Raises:
        KeyError: If ``name`` is not one of :data:`DIMENSIONS`.
    """
    try:
        return DIMENSIONS[name]
    except KeyError:
        raise KeyError(f"Unknown dimension {name!r}; expected one of {sorted(DIMENSIONS)}") from None


def aggregate(
    records: Sequence[NormalizedRecord],
    dimension: Dimension,
    *,
    limit: Optional[int] = None,
) -> AggregatedSeries:
    """Compute the percentage share of each label across ``records``.

    Every declared label is returned, with 0 for labels never seen and for all
    labels when nothing was counted. ``limit`` keeps only the first entries
    after sorting.
    """
    universe = dimension.ordered_labels
    counts: Counter = Counter()
    for record in records:
        for label in dimension.extract(record):
            if label in universe:
                counts[label] += 1
    total = sum(counts.values())

    entries = [
        SeriesEntry(label=label, value=(counts[label] / total) * 100 if total else 0.0) for label in universe
    ]
    # sorted() is stable, so equal values keep declared label order.
    entries = sorted(entries, key=lambda entry: -entry.value)
    if limit is not None:
        entries = entries[:limit]
    return AggregatedSeries(dimension=dimension.name, entries=tuple(entries), total=total)


def drill_down(record: NormalizedRecord, dimension: Dimension) -> AggregatedSeries:
    """Describe one selected record: value 1 for each label it carries."""
    present = set(dimension.extract(record))
    entries = tuple(SeriesEntry(label=label, value=1.0) for label in dimension.ordered_labels if label in present)
    return AggregatedSeries(dimension=dimension.name, entries=entries, total=len(entries), drill_down=True)


def summarize(
    records: Sequence[NormalizedRecord],
    dimension: Dimension,
    *,
    selected: Optional[NormalizedRecord] = None,
    limit: Optional[int] = None,
) -> AggregatedSeries:
    """Drill into ``selected`` when given, otherwise aggregate ``records``."""
    if selected is not None:
        return drill_down(selected, dimension)
    return aggregate(records, dimension, limit=limit)
