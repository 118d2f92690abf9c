"""Text normalization pipeline shared by indexing and querying.

Raw field or query text goes through, in order: lowercase folding, accent
stripping, punctuation removal and whitespace splitting, short token removal,
stopword removal and suffix stripping. Each step can be switched off through
``NormalizationConfig``.
"""

import re
import unicodedata
from typing import Any, FrozenSet, List, Optional, Tuple

from ..config import NormalizationConfig
from .languages import STOPWORDS, SUFFIXES

_PUNCTUATION = re.compile(r"[^\w\s]")

# A stripped token must keep at least this many characters.
MIN_STEM_LENGTH = 3


def strip_accents(text: str) -> str:
    """Remove diacritics by dropping combining marks after NFD decomposition."""
    return ''.join(
        c for c in unicodedata.normalize('NFD', text)
        if unicodedata.category(c) != 'Mn'
    )


class TextNormalizer:
    """Turns raw text into the token sequence stored in the index."""

    def __init__(self, config: Optional[NormalizationConfig] = None):
        self.config = config or NormalizationConfig()
        self.stopwords = self._prepare_stopwords()
        self.suffixes = self._prepare_suffixes()

    def _fold(self, word: str) -> str:
        """Apply the same case and accent folding that tokens receive."""
        if self.config.lowercase:
            word = word.lower()
        if self.config.strip_accents:
            word = strip_accents(word)
        return word

    def _prepare_stopwords(self) -> FrozenSet[str]:
        return frozenset(self._fold(w) for w in STOPWORDS[self.config.language])

    def _prepare_suffixes(self) -> Tuple[str, ...]:
        folded = {self._fold(s) for s in SUFFIXES[self.config.language]}
        # Longest first, ties alphabetical.
        return tuple(sorted(folded, key=lambda s: (-len(s), s)))

    def normalize(self, text: Any) -> List[str]:
        """Normalize text into tokens.

        Args:
            text: Raw text; anything that is not a non-empty string yields no tokens

        Returns:
            List of normalized tokens, in text order
        """
        if not text or not isinstance(text, str):
            return []

        result = text
        if self.config.lowercase:
            result = result.lower()
        if self.config.strip_accents:
            result = strip_accents(result)

        tokens = _PUNCTUATION.sub(' ', result).split()
        tokens = [t for t in tokens if len(t) >= self.config.min_token_length]

        if self.config.remove_stopwords:
            tokens = [t for t in tokens if t not in self.stopwords]

        if self.config.apply_stemming:
            tokens = [self.stem(t) for t in tokens]

        return tokens

    def stem(self, token: str) -> str:
        """Strip the longest known suffix that leaves a usable stem."""
        for suffix in self.suffixes:
            if token.endswith(suffix) and len(token) - len(suffix) >= MIN_STEM_LENGTH:
                return token[:-len(suffix)]
        return token
