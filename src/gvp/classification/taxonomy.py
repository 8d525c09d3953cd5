"""Keyword taxonomies for classifying free-text survey answers.

A taxonomy is an ordered list of ``(category, keywords)`` pairs. Matching is a
case-insensitive substring test and the first category, in declared order,
with any matching keyword wins. The order is the priority policy: overlapping
keyword lists are expected (``"Vendors and Households"`` appears under
Vendors, ``"other"`` under Households) and resolved by position alone.

Blank input, whitespace-only input and the literal ``"N/A"`` never match and
return ``None``. Non-blank input that matches nothing returns the taxonomy's
``fallback`` (which may itself be ``None``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Sequence, Tuple

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class CategoryTaxonomy:
    """Ordered keyword rules for one classification question.

    Attributes:
        name: Taxonomy name used in logs.
        entries: ``(category, keywords)`` pairs in priority order. Keywords are
            kept verbatim; they are lower-cased and stripped only when matched.
        fallback: Category for non-blank text that matches no keyword.
    """

    name: str
    entries: Tuple[Tuple[Enum, Tuple[str, ...]], ...]
    fallback: Optional[Enum] = None
    _needles: Tuple[Tuple[Enum, Tuple[str, ...]], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        needles = tuple(
            (category, tuple(kw.strip().lower() for kw in keywords if kw.strip())) for category, keywords in self.entries
        )
        object.__setattr__(self, "_needles", needles)

    @property
    def categories(self) -> Tuple[Enum, ...]:
        return tuple(category for category, _ in self.entries)

    def match(self, text: str) -> Optional[Enum]:
        """Return the first category whose keywords occur in ``text``, else ``None``."""
        haystack = text.strip().lower()
        for category, keywords in self._needles:
            if any(keyword in haystack for keyword in keywords):
                return category
        return None


def build_taxonomy(
    name: str,
    entries: Sequence[Tuple[Enum, Iterable[str]]],
    *,
    fallback: Optional[Enum] = None,
) -> CategoryTaxonomy:
    """Freeze ``entries`` into a :class:`CategoryTaxonomy`."""
    return CategoryTaxonomy(
        name=name,
        entries=tuple((category, tuple(keywords)) for category, keywords in entries),
        fallback=fallback,
    )


def is_blank_answer(text: Any) -> bool:
    """True for non-strings, empty or whitespace-only strings, and ``"N/A"``."""
    if not isinstance(text, str):
        return True
    stripped = text.strip()
    return not stripped or stripped == NOT_AVAILABLE


def classify(text: Any, taxonomy: CategoryTaxonomy) -> Optional[Enum]:
    """Classify one free-text answer.

    Args:
        text: Raw answer; non-strings are treated as blank.
        taxonomy: Taxonomy to classify into.

    Returns:
        The first matching category, the taxonomy fallback for unmatched
        non-blank text, or ``None`` for blank input.
    """
    if is_blank_answer(text):
        return None
    matched = taxonomy.match(text)
    if matched is not None:
        return matched
    return taxonomy.fallback


def classify_all(texts: Iterable[Any], taxonomy: CategoryTaxonomy) -> frozenset:
    """Classify several answers and return the set of recognised categories."""
    found = (classify(text, taxonomy) for text in texts)
    return frozenset(category for category in found if category is not None)
