"""Inverted index storage."""

from .inverted_index import InvertedIndex

__all__ = ["InvertedIndex"]
