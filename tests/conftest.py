"""Shared fixtures for engine, configuration and CLI tests."""

import logging
from typing import Any, Dict, List

import pytest

from catalog_search import SearchEngine
from catalog_search.sample_catalog import sample_products as _sample_products


class FakeClock:
    """Manually advanced time source for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def sample_products() -> List[Dict[str, Any]]:
    """The five demo confectionery products."""
    return _sample_products()


@pytest.fixture
def engine(sample_products, fake_clock):
    """Engine with the demo catalog indexed and a controllable clock."""
    search_engine = SearchEngine(clock=fake_clock)
    search_engine.index_documents(sample_products)
    return search_engine


@pytest.fixture
def preserve_root_logging():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
