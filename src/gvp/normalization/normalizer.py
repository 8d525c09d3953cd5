"""Survey record normalization.

Turns one raw survey row, in either the cleaned-export or the live-feed
dialect, into a :class:`NormalizedRecord`. The function is pure and total:
missing or malformed input falls back to ``None``, ``0`` or ``""`` and never
raises.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Union

from gvp.classification.keywords import DISPOSER_TAXONOMY, SETTING_TAXONOMY, SOLUTION_TAXONOMY
from gvp.classification.taxonomy import classify, classify_all
from gvp.normalization import aliases
from gvp.normalization.flags import collect_flags
from gvp.normalization.reference_data import (
    DISPOSER_FLAGS,
    DISPOSER_TEXT_FIELDS,
    PROBLEM_FLAGS,
    REASON_FLAGS,
    SETTING_FLAGS,
    SETTING_TEXT_FIELD,
    SOLUTION_FLAGS,
    SOLUTION_TEXT_FIELDS,
    WASTE_TYPE_FLAGS,
)
from gvp.normalization.schema import DEFAULT_CITY, NormalizedRecord, Setting
from gvp.normalization.weights import resolve_quantity, weight_of

LOGGER = logging.getLogger(__name__)

RawRecord = Mapping[str, Any]


def _resolve_setting(raw: RawRecord) -> Setting:
    # A canonical setting column wins; declared order breaks ties.
    flagged = collect_flags(raw, SETTING_FLAGS)
    for setting in Setting:
        if setting in flagged:
            return setting
    category = classify(aliases.resolve(raw, SETTING_TEXT_FIELD), SETTING_TAXONOMY)
    return category or Setting.OTHER


def normalize_record(raw: Union[RawRecord, NormalizedRecord]) -> NormalizedRecord:
    """Normalize one raw survey row.

    Args:
        raw: Raw mapping in either dialect, or an already normalized record.

    Returns:
        The canonical record. Normalizing the result again returns an equal record.
    """
    if isinstance(raw, NormalizedRecord):
        raw = raw.as_raw()
    if not isinstance(raw, Mapping):
        raw = {}

    # Identity, location and media.
    record_id = aliases.resolve_id(raw)
    ward = aliases.resolve_ward(raw)
    latitude, longitude = aliases.resolve_coordinates(raw)
    photo_url, video_url = aliases.resolve_media(raw)
    nearest_location = aliases.collapse_whitespace(aliases.resolve(raw, "nearest_location"))
    city = aliases.collapse_whitespace(aliases.resolve(raw, "city")) or DEFAULT_CITY

    # Column and multi-select flags, both encodings merged additively.
    waste_types = collect_flags(raw, WASTE_TYPE_FLAGS)
    reasons = collect_flags(raw, REASON_FLAGS)
    problems = collect_flags(raw, PROBLEM_FLAGS)
    disposers = collect_flags(raw, DISPOSER_FLAGS)
    solutions = collect_flags(raw, SOLUTION_FLAGS)

    # Free-text answers.
    disposers |= classify_all((aliases.resolve(raw, name) for name in DISPOSER_TEXT_FIELDS), DISPOSER_TAXONOMY)
    solutions |= classify_all((aliases.resolve(raw, name) for name in SOLUTION_TEXT_FIELDS), SOLUTION_TAXONOMY)
    setting = _resolve_setting(raw)

    quantity = resolve_quantity(raw)

    return NormalizedRecord(
        id=record_id,
        ward_number=ward,
        city=city,
        latitude=latitude,
        longitude=longitude,
        nearest_location=nearest_location,
        photo_url=photo_url,
        video_url=video_url,
        waste_types=waste_types,
        waste_quantity=quantity,
        waste_weight_units=weight_of(quantity),
        disposers=disposers,
        reasons=reasons,
        problems=problems,
        solutions=solutions,
        setting=setting,
        details=aliases.resolve_details(raw),
    )


def normalize_records(rows: Iterable[Any]) -> List[NormalizedRecord]:
    """Normalize every row, keeping input order.

    Rows that are not mappings are logged and normalized as empty records.
    """
    normalized: List[NormalizedRecord] = []
    for index, row in enumerate(rows):
        if not isinstance(row, (Mapping, NormalizedRecord)):
            LOGGER.warning(
                "Survey row %d is a %s, not a mapping; normalizing it as an empty record",
                index,
                type(row).__name__,
            )
        normalized.append(normalize_record(row))
    return normalized
