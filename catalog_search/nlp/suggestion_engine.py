"""'Did you mean' query suggestions built from the indexed vocabulary."""

import logging
from typing import List, Optional, Tuple

from ..config import SuggestionConfig
from ..index import InvertedIndex
from ..text import TextNormalizer
from .edit_distance import EditDistanceCalculator

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """Proposes alternative queries that swap one token for a close indexed term."""

    def __init__(
        self,
        normalizer: TextNormalizer,
        config: Optional[SuggestionConfig] = None,
        calculator: Optional[EditDistanceCalculator] = None
    ):
        self.normalizer = normalizer
        self.config = config or SuggestionConfig()
        self.calculator = calculator or EditDistanceCalculator(
            max_distance=self.config.max_distance,
            memo_size=self.config.memo_size
        )

    def suggest(self, query_text: str, index: InvertedIndex) -> List[str]:
        """Generate alternative queries for ``query_text``.

        Each query token is compared against indexed terms of similar length.
        Terms within ``max_distance`` edits (but not identical) are ranked by
        distance, then by how many documents contain them, then
        alphabetically, and the best few replace that token in the query.

        Returns:
            Distinct suggestions in discovery order, at most ``max_suggestions``
        """
        tokens = self.normalizer.normalize(query_text)
        if not tokens:
            return []

        max_distance = self.config.max_distance
        vocabulary = index.vocabulary()
        suggestions: List[str] = []

        for token in tokens:
            candidates = self._candidates(token, vocabulary, index, max_distance)
            for term in candidates[:self.config.candidates_per_token]:
                suggestion = ' '.join(term if t == token else t for t in tokens)
                if suggestion not in suggestions:
                    suggestions.append(suggestion)

        logger.debug(
            "Generated suggestions",
            extra={"tokens": len(tokens), "suggestions": len(suggestions)}
        )
        return suggestions[:self.config.max_suggestions]

    def _candidates(
        self,
        token: str,
        vocabulary: List[str],
        index: InvertedIndex,
        max_distance: int
    ) -> List[str]:
        scored: List[Tuple[int, int, str]] = []

        for term in vocabulary:
            # Length difference is a lower bound on the distance.
            if abs(len(term) - len(token)) > max_distance:
                continue
            distance = self.calculator.distance(token, term)
            if 0 < distance <= max_distance:
                scored.append((distance, -index.document_frequency(term), term))

        scored.sort()
        return [term for _, _, term in scored]
