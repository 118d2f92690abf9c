"""Result ordering and pagination."""

from .relevance_sorting import Page, RelevanceSorter, SCORE_TIE_EPSILON, compare_values

__all__ = ["Page", "RelevanceSorter", "SCORE_TIE_EPSILON", "compare_values"]
