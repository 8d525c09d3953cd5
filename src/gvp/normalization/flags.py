"""Boolean flag normalization for both survey dialects.

The cleaned export stores one 0/1-ish column per category, encoded in several
ways (``1``, ``"1"``, ``"1_0"``, ``True`` ...). The live feed stores a single
space-joined string of machine tokens per multi-select question. Both end up as
a set of canonical categories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Mapping, Tuple

from gvp.normalization.aliases import resolve_any

_TRUTHY = frozenset({"1", "1_0", "true"})


def normalize_flag(value: Any) -> int:
    """Return ``1`` for truthy encodings and ``0`` for anything else.

    ``1``, ``"1"``, ``"1_0"`` and ``True`` (case and surrounding whitespace
    ignored) map to 1. Every other value, including ``None`` and unknown
    strings, maps to 0.
    """
    if value is True:
        return 1
    if value is False or value is None:
        return 0
    if isinstance(value, (int, float)):
        return 1 if value == 1 else 0
    if isinstance(value, str):
        return 1 if value.strip().lower() in _TRUTHY else 0
    return 0


def expand_multi_select(raw: Any, token_map: Mapping[str, Enum]) -> FrozenSet[Enum]:
    """Map a space-separated token string onto the categories it names.

    Unknown tokens are ignored; non-string input yields an empty set.
    """
    if not isinstance(raw, str):
        return frozenset()
    return frozenset(token_map[token] for token in raw.split() if token in token_map)


@dataclass(frozen=True)
class FlagGroup:
    """Where one multi-select question lives in each dialect.

    Attributes:
        name: Group name used in logs.
        columns: Direct 0/1 column name -> category (canonical and cleaned-export spellings).
        token_fields: Aliases of the live-feed multi-select field, in priority order.
        token_map: Live-feed machine token -> category.
    """

    name: str
    columns: Mapping[str, Enum]
    token_fields: Tuple[str, ...] = ()
    token_map: Mapping[str, Enum] = field(default_factory=dict)


def collect_flags(raw: Mapping[str, Any], group: FlagGroup) -> FrozenSet[Enum]:
    """Return the union of categories set by columns and by multi-select tokens.

    A flag raised by either encoding stays raised; nothing resets it to 0.
    """
    flagged = {category for column, category in group.columns.items() if normalize_flag(raw.get(column)) == 1}
    if group.token_fields:
        flagged |= expand_multi_select(resolve_any(raw, group.token_fields), group.token_map)
    return frozenset(flagged)
