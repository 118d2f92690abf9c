"""Relevance scoring."""

from .tfidf_scorer import TfidfScorer

__all__ = ["TfidfScorer"]
