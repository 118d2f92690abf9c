"""Text normalization for indexing and querying."""

from .normalizer import TextNormalizer, strip_accents
from .languages import STOPWORDS, SUFFIXES

__all__ = [
    "TextNormalizer",
    "strip_accents",
    "STOPWORDS",
    "SUFFIXES",
]
