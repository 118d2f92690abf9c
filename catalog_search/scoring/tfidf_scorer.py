"""TF-IDF relevance scoring over the postings of the query tokens."""

import logging
import threading
from typing import Dict, Iterable

from ..index import InvertedIndex
from ..models import DocumentId

logger = logging.getLogger(__name__)


class TfidfScorer:
    """Aggregates ``tf * idf * field_weight`` per document.

    Only the postings of the query's own tokens are visited, so the cost is
    bounded by query selectivity rather than index size. Ordering is left to
    the sorter.
    """

    def __init__(self):
        self.scored_queries = 0
        self._counter_lock = threading.Lock()

    def score(self, index: InvertedIndex, tokens: Iterable[str]) -> Dict[DocumentId, float]:
        """Score every document that contains at least one query token.

        Args:
            index: Index to read postings and IDF from
            tokens: Normalized query tokens; repeated tokens count repeatedly

        Returns:
            Mapping of document id to score; non-matching documents are absent
        """
        with self._counter_lock:
            self.scored_queries += 1
        scores: Dict[DocumentId, float] = {}

        for token in tokens:
            idf = index.idf(token)
            if idf is None:
                continue
            for posting in index.postings(token):
                contribution = posting.term_frequency * idf * posting.field_weight
                scores[posting.doc_id] = scores.get(posting.doc_id, 0.0) + contribution

        logger.debug("Scored query", extra={"matches": len(scores)})
        return scores
