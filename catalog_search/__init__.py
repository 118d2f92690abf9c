"""In-memory full-text search engine for product catalogs.

Records are indexed into a weighted inverted index, ranked by TF-IDF,
filtered on their attributes, sorted, paginated and cached. Queries that
come up short get "did you mean" suggestions.
"""

from .config import ConfigManager, SearchEngineConfig
from .engine import SearchEngine
from .errors import ConfigurationError, IndexStateError, SearchEngineError
from .models import (
    EngineStatistics,
    QueryResponse,
    RangeFilter,
    RankedDocument,
    SearchOptions,
    SortOrder,
    SortSpec,
)

__version__ = "1.0.0"

__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "EngineStatistics",
    "IndexStateError",
    "QueryResponse",
    "RangeFilter",
    "RankedDocument",
    "SearchEngine",
    "SearchEngineConfig",
    "SearchEngineError",
    "SearchOptions",
    "SortOrder",
    "SortSpec",
]
