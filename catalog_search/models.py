"""Core models for the catalog search engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Records are plain mappings: strings, numbers, booleans and string lists are
# understood by the engine, everything else is passed through untouched.
AttributeValue = Union[str, int, float, bool, List[str], None]
Record = Dict[str, Any]
DocumentId = Hashable


class SortOrder(str, Enum):
    """Sort order options."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Posting:
    """One occurrence record of a token in a single field of a document."""

    doc_id: DocumentId
    field: str
    term_frequency: int
    field_weight: float


class RangeFilter(BaseModel):
    """Closed numeric interval filter; either bound may be omitted."""

    min: Optional[float] = Field(default=None, description="Inclusive lower bound")
    max: Optional[float] = Field(default=None, description="Inclusive upper bound")

    model_config = ConfigDict(frozen=True)


class SortSpec(BaseModel):
    """Secondary sort applied among results with near-equal scores."""

    field: str = Field(description="Record attribute to sort by")
    direction: SortOrder = Field(default=SortOrder.ASC, description="Sort direction")

    model_config = ConfigDict(frozen=True)

    @field_validator("direction", mode="before")
    @classmethod
    def _lowercase_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        return value


class SearchOptions(BaseModel):
    """Options accepted by ``SearchEngine.search``."""

    filters: Dict[str, Any] = Field(default_factory=dict, description="Per-attribute filters")
    sort: Optional[SortSpec] = Field(default=None, description="Secondary sort")
    page: int = Field(default=1, description="Page number (1-based)")
    page_size: Optional[int] = Field(default=None, description="Items per page")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("filters", mode="before")
    @classmethod
    def _none_filters(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def coerce(cls, options: Union["SearchOptions", Mapping[str, Any], None]) -> "SearchOptions":
        """Accept an options model, a plain mapping or ``None``."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))


class RankedDocument(BaseModel):
    """A matching record together with its relevance score."""

    id: Any = Field(description="Document identifier")
    score: float = Field(description="Aggregated TF-IDF score")
    document: Record = Field(description="Stored record, verbatim")

    model_config = ConfigDict(frozen=True)


class QueryResponse(BaseModel):
    """Search execution result."""

    results: List[RankedDocument] = Field(default_factory=list, description="Current page of results")
    total: int = Field(default=0, description="Total number of matching documents")
    page: int = Field(default=1, description="Requested page number")
    total_pages: int = Field(default=0, description="Number of pages for this page size")
    execution_time_ms: float = Field(default=0.0, description="Execution time in milliseconds")
    query_tokens: List[str] = Field(default_factory=list, description="Normalized query tokens")
    suggestions: List[str] = Field(default_factory=list, description="Alternative queries")

    model_config = ConfigDict(frozen=True)

    @property
    def has_next_page(self) -> bool:
        """Check if there are more pages."""
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        """Check if there are previous pages."""
        return self.page > 1


class EngineStatistics(BaseModel):
    """Snapshot of index and cache statistics."""

    document_count: int = Field(description="Live documents")
    unique_term_count: int = Field(description="Distinct indexed tokens")
    average_document_size: float = Field(description="Postings per document")
    cache_size: int = Field(description="Cached responses")
    indexed_fields: List[str] = Field(description="Fields present in the weight table")
    cache_ttl: float = Field(description="Cache TTL in seconds")
    cache_hits: int = Field(default=0, description="Cache hits since construction")
    cache_misses: int = Field(default=0, description="Cache misses since construction")

    @property
    def cache_hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.cache_hits + self.cache_misses
        if total == 0:
            return 0.0
        return self.cache_hits / total
