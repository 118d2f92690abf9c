"""Attribute filters applied to scored search results."""

import logging
import math
import re
from typing import Any, List, Mapping, Optional, Sequence

from ..models import AttributeValue, RangeFilter, RankedDocument

logger = logging.getLogger(__name__)

# Leading decimal number of a string, e.g. "12.5kg" -> 12.5.
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any) -> Optional[float]:
    """Parse an attribute as a number; None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if stripped in ("Infinity", "+Infinity"):
            return math.inf
        if stripped == "-Infinity":
            return -math.inf
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    return None if math.isnan(number) else number


def as_range(filter_value: Any) -> Optional[RangeFilter]:
    """Interpret a filter value as a numeric range if it declares a bound."""
    if isinstance(filter_value, RangeFilter):
        return filter_value
    if isinstance(filter_value, Mapping):
        if filter_value.get("min") is None and filter_value.get("max") is None:
            return None
        # Unparseable bounds are dropped rather than rejected.
        return RangeFilter(
            min=parse_number(filter_value.get("min")),
            max=parse_number(filter_value.get("max"))
        )
    return None


def _strict_equals(a: Any, b: Any) -> bool:
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


class AttributeFilter:
    """Evaluates per-attribute filter specs against stored records.

    Filter semantics, per attribute:
    - ``None`` filter values are ignored
    - ``{"min": x, "max": y}`` (or ``RangeFilter``) keeps numeric attributes
      inside the closed interval; non-numeric attributes fail
    - list attributes pass when they share a value with the filter value
      (scalar or list); an empty filter list never excludes
    - everything else requires strict equality
    - a missing or ``None`` attribute always fails
    """

    def apply(
        self,
        results: Sequence[RankedDocument],
        filters: Optional[Mapping[str, Any]]
    ) -> List[RankedDocument]:
        """Keep the results whose documents satisfy every filter."""
        if not filters:
            return list(results)

        active = {name: value for name, value in filters.items() if value is not None}
        if not active:
            return list(results)

        kept = [r for r in results if self.matches(r.document, active)]
        logger.debug(
            "Applied filters",
            extra={"filters": sorted(active), "before": len(results), "after": len(kept)}
        )
        return kept

    def matches(self, document: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        """Check if a record satisfies all filters."""
        for name, expected in filters.items():
            if expected is None:
                continue
            if not self._matches_one(document.get(name), expected):
                return False
        return True

    def _matches_one(self, actual: AttributeValue, expected: Any) -> bool:
        if actual is None:
            return False

        bounds = as_range(expected)
        if bounds is not None:
            number = parse_number(actual)
            if number is None:
                return False
            if bounds.min is not None and number < bounds.min:
                return False
            if bounds.max is not None and number > bounds.max:
                return False
            return True

        if isinstance(actual, (list, tuple)):
            if isinstance(expected, (list, tuple, set, frozenset)):
                if not expected:
                    return True
                return any(
                    self._contains(actual, v) for v in expected if v is not None
                )
            return self._contains(actual, expected)

        return _strict_equals(actual, expected)

    @staticmethod
    def _contains(values: Sequence[Any], wanted: Any) -> bool:
        return any(_strict_equals(v, wanted) for v in values)
