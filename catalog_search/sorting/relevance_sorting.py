"""Relevance ordering, secondary sorting and pagination of search results."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, List, Optional, Sequence

from ..models import RankedDocument, SortOrder, SortSpec
from ..text import strip_accents

logger = logging.getLogger(__name__)

# Scores closer than this are considered tied and left to the secondary sort.
SCORE_TIE_EPSILON = 0.5


@dataclass
class Page:
    """One page of sorted results plus the counts needed to navigate."""

    items: List[RankedDocument] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 1
    total_pages: int = 0


def _collation_key(value: str):
    """Locale-style key: accent and case-insensitive first, exact text second."""
    return (strip_accents(value).casefold(), value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_date(value: Any) -> bool:
    return isinstance(value, (date, datetime))


def _date_ordinal(value: Any) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return datetime(value.year, value.month, value.day).timestamp()


def compare_values(a: Any, b: Any) -> int:
    """Compare two attribute values: -1, 0 or 1.

    Numbers compare numerically, strings by collation key, dates
    chronologically; any other pair falls back to ``<``/``>`` and values
    that cannot be ordered compare equal.
    """
    if _is_number(a) and _is_number(b):
        left, right = a, b
    elif isinstance(a, str) and isinstance(b, str):
        left, right = _collation_key(a), _collation_key(b)
    elif _is_date(a) and _is_date(b):
        left, right = _date_ordinal(a), _date_ordinal(b)
    else:
        left, right = a, b

    try:
        if left < right:
            return -1
        if left > right:
            return 1
    except TypeError:
        return 0
    return 0


class RelevanceSorter:
    """Orders results by descending score with an optional secondary field.

    The secondary field only breaks near-ties: results whose scores differ by
    more than ``epsilon`` always keep their relevance order.
    """

    def __init__(self, epsilon: float = SCORE_TIE_EPSILON):
        self.epsilon = epsilon

    def sort(
        self,
        results: Sequence[RankedDocument],
        sort_spec: Optional[SortSpec] = None
    ) -> List[RankedDocument]:
        """Sort results by relevance, then by the secondary field if given.

        The score-ordered list is cut into bands, each holding the results
        within ``epsilon`` of the band's top score. The secondary field only
        reorders results inside a band, so no result ever moves ahead of one
        that outscores it by more than ``epsilon``.
        """
        ordered = sorted(results, key=lambda r: r.score, reverse=True)
        if sort_spec is None or len(ordered) <= 1:
            return ordered

        multiplier = -1 if sort_spec.direction == SortOrder.DESC else 1
        sort_field = sort_spec.field

        def comparator(a: RankedDocument, b: RankedDocument) -> int:
            return compare_values(
                a.document.get(sort_field), b.document.get(sort_field)
            ) * multiplier

        sorted_results: List[RankedDocument] = []
        for band in self._score_bands(ordered):
            sorted_results.extend(sorted(band, key=cmp_to_key(comparator)))
        return sorted_results

    def _score_bands(self, ordered: Sequence[RankedDocument]) -> List[List[RankedDocument]]:
        bands: List[List[RankedDocument]] = []
        for result in ordered:
            if bands and bands[-1][0].score - result.score <= self.epsilon:
                bands[-1].append(result)
            else:
                bands.append([result])
        return bands

    def paginate(
        self,
        results: Sequence[RankedDocument],
        page: int,
        page_size: int
    ) -> Page:
        """Slice one 1-based page out of sorted results.

        Pages below 1 or past the end are empty rather than errors, and the
        page size is clamped to at least 1.
        """
        page_size = max(1, int(page_size))
        total = len(results)
        total_pages = math.ceil(total / page_size)

        if page < 1 or page > total_pages:
            items: List[RankedDocument] = []
        else:
            start = (page - 1) * page_size
            items = list(results[start:start + page_size])

        return Page(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
        )
