"""Exception hierarchy for the catalog search engine."""

from typing import Any, Dict, Optional


class SearchEngineError(Exception):
    """Base exception for all catalog search errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class IndexStateError(SearchEngineError):
    """Raised when the in-memory index no longer satisfies its invariants."""

    def __init__(
        self,
        message: str,
        expected: Any = None,
        actual: Any = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="index_state", context=context)
        self.expected = expected
        self.actual = actual


class ConfigurationError(SearchEngineError):
    """Error from configuration loading and validation."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="configuration", context=context)
        self.config_key = config_key
