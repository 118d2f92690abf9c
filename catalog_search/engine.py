"""Search engine facade tying indexing, scoring and result processing together."""

import copy
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Union

from .cache import QueryCache, build_cache_key
from .concurrency import ReadWriteLock
from .config import SearchEngineConfig
from .filters import AttributeFilter
from .index import InvertedIndex
from .logging_config import Timer, get_structured_logger, log_performance
from .models import (
    DocumentId, EngineStatistics, QueryResponse, RankedDocument, Record, SearchOptions
)
from .nlp import SuggestionEngine
from .scoring import TfidfScorer
from .sorting import RelevanceSorter
from .text import TextNormalizer

logger = get_structured_logger(__name__)


class SearchEngine:
    """In-memory full-text search over a catalog of records.

    Searches run concurrently under the shared side of a readers/writer
    lock. Index mutations are serialized and exclusive, and each one that
    changes the index drops every cached response.
    """

    def __init__(
        self,
        config: Optional[SearchEngineConfig] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize the engine.

        Args:
            config: Engine configuration; defaults apply when omitted
            clock: Monotonic time source used for cache expiry
        """
        self.config = config or SearchEngineConfig()

        self.normalizer = TextNormalizer(self.config.normalization)
        self.scorer = TfidfScorer()
        self.filter_engine = AttributeFilter()
        self.sorter = RelevanceSorter()
        self.suggester = SuggestionEngine(self.normalizer, self.config.suggestions)
        self.cache = QueryCache(
            max_entries=self.config.cache.max_entries,
            ttl_seconds=self.config.cache.ttl_seconds,
            clock=clock
        )

        self._index = self._new_index()
        self._lock = ReadWriteLock()
        self._writer_mutex = threading.Lock()

    def _new_index(self) -> InvertedIndex:
        return InvertedIndex(
            normalizer=self.normalizer,
            field_weights=self.config.field_weights,
            id_field=self.config.id_field
        )

    @property
    def index(self) -> InvertedIndex:
        return self._index

    @contextmanager
    def _mutating(self) -> Iterator[InvertedIndex]:
        with self._writer_mutex, self._lock.write_locked():
            self._index.check_consistency()
            yield self._index

    # -- indexing ---------------------------------------------------------

    def index_document(self, record: Record) -> bool:
        """Add a record to the index, replacing a stored record with the same id.

        Returns:
            True if the record was indexed, False if it had no usable id
        """
        with self._mutating() as index:
            indexed = index.add_document(record)
            if indexed:
                self.cache.invalidate_all()
        return indexed

    def index_documents(self, records: Iterable[Record]) -> int:
        """Add many records at once.

        Returns:
            Number of records indexed
        """
        with self._mutating() as index, Timer() as timer:
            indexed = index.add_documents(records)
            if indexed:
                self.cache.invalidate_all()

        logger.info(
            "Indexed documents",
            indexed=indexed,
            document_count=self._index.document_count,
            duration_ms=round(timer.duration_ms, 3)
        )
        return indexed

    def update_document(self, record: Record) -> bool:
        """Replace the stored version of a record.

        Unknown ids are simply indexed.

        Returns:
            True if the record was indexed, False if it had no usable id
        """
        return self.index_document(record)

    def remove_document(self, doc_id: DocumentId) -> bool:
        """Remove a document from the index.

        Returns:
            True if the document existed
        """
        with self._mutating() as index:
            removed = index.remove_document(doc_id)
            if removed:
                self.cache.invalidate_all()
        return removed

    def rebuild_all(self) -> int:
        """Re-index every stored record from scratch.

        The replacement index is built on the side while searches keep
        running against the current one, then swapped in.

        Returns:
            Number of records in the rebuilt index
        """
        with self._writer_mutex:
            with self._lock.read_locked():
                self._index.check_consistency()
                snapshot = self._index.documents()

            with Timer() as timer:
                fresh = self._new_index()
                rebuilt = fresh.add_documents(snapshot)

            with self._lock.write_locked():
                self._index = fresh
                self.cache.invalidate_all()

        logger.info(
            "Rebuilt index",
            document_count=rebuilt,
            duration_ms=round(timer.duration_ms, 3)
        )
        return rebuilt

    # -- querying ---------------------------------------------------------

    def search(
        self,
        query_text: str,
        options: Union[SearchOptions, Mapping[str, Any], None] = None
    ) -> QueryResponse:
        """Run a ranked full-text query.

        Args:
            query_text: Free text; normalized the same way as indexed fields
            options: ``SearchOptions`` or a mapping with ``filters``, ``sort``,
                ``page`` and ``page_size``

        Returns:
            The requested page of results; repeated identical queries return
            the cached response object until it expires or the index changes
        """
        search_options = SearchOptions.coerce(options)
        cache_enabled = self.config.cache.enabled

        with self._lock.read_locked():
            index = self._index
            index.check_consistency()

            cache_key = None
            if cache_enabled:
                cache_key = build_cache_key(query_text, search_options)
                cached = self.cache.get(cache_key)
                if cached is not None:
                    logger.debug("Cache hit", query=str(query_text)[:50])
                    return cached

            tokens = self.normalizer.normalize(query_text)
            if not tokens:
                response = QueryResponse(page=search_options.page)
            else:
                response = self._execute(query_text, tokens, search_options, index)

            if cache_key is not None:
                self.cache.put(cache_key, response)

        log_performance(
            __name__, "search", response.execution_time_ms,
            query=str(query_text)[:50], total=response.total
        )
        return response

    def _execute(
        self,
        query_text: str,
        tokens: List[str],
        options: SearchOptions,
        index: InvertedIndex
    ) -> QueryResponse:
        page_size = options.page_size
        if page_size is None:
            page_size = self.config.pagination.page_size

        with Timer() as timer:
            scores = self.scorer.score(index, tokens)
            ranked = [
                RankedDocument(
                    id=doc_id, score=score, document=copy.deepcopy(index.get_document(doc_id))
                )
                for doc_id, score in scores.items()
            ]

            filtered = self.filter_engine.apply(ranked, options.filters)
            ordered = self.sorter.sort(filtered, options.sort)
            page = self.sorter.paginate(ordered, options.page, page_size)

            suggestions: List[str] = []
            if self.config.suggestions.enabled and len(page.items) < page.page_size:
                suggestions = self.suggester.suggest(query_text, index)

        return QueryResponse(
            results=page.items,
            total=page.total,
            page=options.page,
            total_pages=page.total_pages,
            execution_time_ms=timer.duration_ms,
            query_tokens=tokens,
            suggestions=suggestions
        )

    # -- inspection -------------------------------------------------------

    def get_statistics(self) -> EngineStatistics:
        """Snapshot of index and cache statistics."""
        with self._lock.read_locked():
            index = self._index
            index.check_consistency()
            document_count = index.document_count
            average_size = index.posting_count / document_count if document_count else 0.0

            return EngineStatistics(
                document_count=document_count,
                unique_term_count=index.unique_term_count,
                average_document_size=average_size,
                cache_size=self.cache.size,
                indexed_fields=list(self.config.field_weights),
                cache_ttl=self.config.cache.ttl_seconds,
                cache_hits=self.cache.hits,
                cache_misses=self.cache.misses
            )

    def purge_expired_cache_entries(self) -> int:
        """Drop cached responses that have outlived the TTL.

        Returns:
            Number of entries removed
        """
        removed = self.cache.purge_expired()
        if removed:
            logger.debug("Purged expired cache entries", removed=removed)
        return removed

    def get_document(self, doc_id: DocumentId) -> Optional[Record]:
        """Copy of the stored record, or None for unknown ids."""
        with self._lock.read_locked():
            document = self._index.get_document(doc_id)
            return copy.deepcopy(document) if document is not None else None

    def idf(self, token: str) -> Optional[float]:
        """IDF of an already-normalized token, None when it is not indexed."""
        with self._lock.read_locked():
            return self._index.idf(token)

    def verify_integrity(self) -> None:
        """Run the full index invariant scan.

        Raises:
            IndexStateError: If any index invariant is violated
        """
        with self._lock.read_locked():
            self._index.verify_integrity()
