"""Fuzzy matching for query suggestions."""

from .edit_distance import BoundedMemo, EditDistanceCalculator
from .suggestion_engine import SuggestionEngine

__all__ = ["BoundedMemo", "EditDistanceCalculator", "SuggestionEngine"]
