"""In-memory inverted index with per-term document frequency and IDF.

Performance characteristics:
- add: O(t) for the t distinct (token, field) pairs of the record, plus an
  O(V) IDF refresh over the vocabulary
- remove: O(p) over the postings of the tokens the document contained,
  plus the IDF refresh
- batch add refreshes IDF once for the whole batch
"""

import copy
import logging
import math
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from ..errors import IndexStateError
from ..models import DocumentId, Posting, Record
from ..text import TextNormalizer

logger = logging.getLogger(__name__)


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


class InvertedIndex:
    """Token -> postings index owning document storage and IDF statistics."""

    def __init__(
        self,
        normalizer: TextNormalizer,
        field_weights: Mapping[str, float],
        id_field: str = "id"
    ):
        self.normalizer = normalizer
        self.field_weights = dict(field_weights)
        self.id_field = id_field

        self._postings: Dict[str, List[Posting]] = {}
        self._documents: Dict[DocumentId, Record] = {}
        self._doc_terms: Dict[DocumentId, Set[str]] = {}
        self._doc_freq: Dict[str, int] = {}
        self._idf: Dict[str, float] = {}
        self._total_documents = 0

    # -- properties -------------------------------------------------------

    @property
    def document_count(self) -> int:
        return self._total_documents

    @property
    def unique_term_count(self) -> int:
        return len(self._postings)

    @property
    def posting_count(self) -> int:
        return sum(len(postings) for postings in self._postings.values())

    # -- lookups ----------------------------------------------------------

    def postings(self, token: str) -> List[Posting]:
        """Postings for a token; empty when the token is not indexed."""
        return self._postings.get(token, [])

    def idf(self, token: str) -> Optional[float]:
        """IDF of an indexed token, None for unknown tokens."""
        return self._idf.get(token)

    def document_frequency(self, token: str) -> int:
        return self._doc_freq.get(token, 0)

    def vocabulary(self) -> List[str]:
        """Indexed tokens in first-seen order."""
        return list(self._postings)

    def get_document(self, doc_id: DocumentId) -> Optional[Record]:
        if not _is_hashable(doc_id):
            return None
        return self._documents.get(doc_id)

    def contains(self, doc_id: DocumentId) -> bool:
        return _is_hashable(doc_id) and doc_id in self._documents

    def documents(self) -> List[Record]:
        """Snapshot of all stored records in insertion order."""
        return list(self._documents.values())

    def document_id(self, record: Any) -> Optional[DocumentId]:
        """Extract a usable identifier from a record, or None."""
        if not isinstance(record, Mapping):
            return None
        doc_id = record.get(self.id_field)
        if doc_id is None or doc_id == "" or isinstance(doc_id, bool):
            return None
        if not _is_hashable(doc_id):
            return None
        return doc_id

    # -- mutations --------------------------------------------------------

    def add_document(self, record: Record) -> bool:
        """Index a single record, replacing any stored version with the same id.

        Returns:
            True if the record was indexed, False if it had no usable id
        """
        if not self._absorb(record):
            return False
        self._recompute_idf()
        return True

    def add_documents(self, records: Iterable[Record]) -> int:
        """Index many records, refreshing IDF once at the end.

        Returns:
            Number of records indexed
        """
        indexed = 0
        for record in records:
            if self._absorb(record):
                indexed += 1
        if indexed:
            self._recompute_idf()
        return indexed

    def remove_document(self, doc_id: DocumentId) -> bool:
        """Remove a document and every posting that references it.

        Returns:
            True if the document existed
        """
        if not self._detach(doc_id):
            return False
        self._recompute_idf()
        return True

    def clear(self) -> None:
        self._postings.clear()
        self._documents.clear()
        self._doc_terms.clear()
        self._doc_freq.clear()
        self._idf.clear()
        self._total_documents = 0

    def _absorb(self, record: Record) -> bool:
        doc_id = self.document_id(record)
        if doc_id is None:
            logger.warning(
                "Skipping record without a usable identifier",
                extra={"id_field": self.id_field}
            )
            return False

        if doc_id in self._documents:
            self._detach(doc_id)

        stored = copy.deepcopy(dict(record))
        self._documents[doc_id] = stored
        self._total_documents += 1

        terms: Set[str] = set()
        for field_name, weight in self.field_weights.items():
            value = stored.get(field_name)
            if not value:
                continue

            if isinstance(value, (list, tuple)):
                value = ' '.join(str(v) for v in value if v is not None)

            term_freq = Counter(self.normalizer.normalize(value))
            for token, frequency in term_freq.items():
                self._postings.setdefault(token, []).append(
                    Posting(doc_id=doc_id, field=field_name,
                            term_frequency=frequency, field_weight=weight)
                )
                terms.add(token)

        for token in terms:
            self._doc_freq[token] = self._doc_freq.get(token, 0) + 1
        self._doc_terms[doc_id] = terms

        logger.debug("Indexed document", extra={"doc_id": str(doc_id), "terms": len(terms)})
        return True

    def _detach(self, doc_id: DocumentId) -> bool:
        if not self.contains(doc_id):
            return False

        del self._documents[doc_id]
        self._total_documents -= 1

        for token in self._doc_terms.pop(doc_id, set()):
            remaining = [p for p in self._postings.get(token, []) if p.doc_id != doc_id]
            if remaining:
                self._postings[token] = remaining
                self._doc_freq[token] -= 1
            else:
                self._postings.pop(token, None)
                self._doc_freq.pop(token, None)
                self._idf.pop(token, None)

        logger.debug("Removed document", extra={"doc_id": str(doc_id)})
        return True

    def _recompute_idf(self) -> None:
        total = self._total_documents
        if total <= 0:
            self._idf.clear()
            return
        self._idf = {
            token: math.log(total / df)
            for token, df in self._doc_freq.items()
        }

    # -- invariants -------------------------------------------------------

    def check_consistency(self) -> None:
        """Cheap invariant check run before every engine operation.

        Raises:
            IndexStateError: If the document counter disagrees with storage
        """
        if self._total_documents != len(self._documents):
            raise IndexStateError(
                "Document count does not match stored documents",
                expected=len(self._documents),
                actual=self._total_documents
            )
        if len(self._doc_terms) != len(self._documents):
            raise IndexStateError(
                "Term map does not match stored documents",
                expected=len(self._documents),
                actual=len(self._doc_terms)
            )

    def verify_integrity(self) -> None:
        """Full scan of every posting and statistic.

        Raises:
            IndexStateError: On the first violated invariant
        """
        self.check_consistency()

        docs_per_token: Dict[str, Set[DocumentId]] = defaultdict(set)
        for token, postings in self._postings.items():
            if not postings:
                raise IndexStateError(f"Token '{token}' has no postings")
            for posting in postings:
                if posting.doc_id not in self._documents:
                    raise IndexStateError(
                        f"Posting for '{token}' references unknown document",
                        context={"doc_id": str(posting.doc_id)}
                    )
                docs_per_token[token].add(posting.doc_id)

        for token, doc_ids in docs_per_token.items():
            if self._doc_freq.get(token) != len(doc_ids):
                raise IndexStateError(
                    f"Document frequency for '{token}' is stale",
                    expected=len(doc_ids),
                    actual=self._doc_freq.get(token)
                )
        if set(self._doc_freq) != set(self._postings):
            raise IndexStateError("Document frequency table and vocabulary disagree")
        if self._total_documents and set(self._idf) != set(self._postings):
            raise IndexStateError("IDF table and vocabulary disagree")
