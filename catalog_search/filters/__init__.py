"""Attribute filtering for search results."""

from .attribute_filter import AttributeFilter, as_range, parse_number

__all__ = ["AttributeFilter", "as_range", "parse_number"]
