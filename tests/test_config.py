"""Tests for configuration models and loading."""

import json

import pytest
from pydantic import ValidationError

from catalog_search.config import (
    DEFAULT_FIELD_WEIGHTS,
    ConfigManager,
    NormalizationConfig,
    SearchEngineConfig,
)
from catalog_search.errors import ConfigurationError, SearchEngineError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CATALOG_SEARCH_* overrides from the outer environment out of the tests."""
    for env_key in ConfigManager.ENV_OVERRIDES:
        monkeypatch.delenv(env_key, raising=False)


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestSearchEngineConfig:
    """Test the configuration models."""

    def test_defaults(self):
        config = SearchEngineConfig()

        assert config.field_weights == DEFAULT_FIELD_WEIGHTS
        assert config.id_field == "id"
        assert config.normalization.language == "pt"
        assert config.normalization.min_token_length == 2
        assert config.cache.max_entries == 100
        assert config.cache.ttl_seconds == 3600.0
        assert config.pagination.page_size == 12
        assert config.suggestions.max_suggestions == 5
        assert config.suggestions.max_distance == 2
        assert config.suggestions.candidates_per_token == 3
        assert config.suggestions.memo_size == 1000

    def test_frozen(self):
        config = SearchEngineConfig()
        with pytest.raises(ValidationError):
            config.id_field = "sku"

    @pytest.mark.parametrize("weight", [0, -1.5])
    def test_non_positive_weights_rejected(self, weight):
        with pytest.raises(ValidationError):
            SearchEngineConfig(field_weights={"nome": weight})

    def test_unknown_language_rejected(self):
        with pytest.raises(ValidationError):
            NormalizationConfig(language="xx")


class TestConfigManager:
    """Test suite for ConfigManager."""

    def test_load_defaults(self):
        assert ConfigManager().load() == SearchEngineConfig()

    def test_load_caches_result(self):
        manager = ConfigManager()
        assert manager.load() is manager.load()

    def test_file_values_merged_over_defaults(self, tmp_path):
        path = write_config(tmp_path, {"cache": {"ttl_seconds": 60}})
        config = ConfigManager(path).load()

        assert config.cache.ttl_seconds == 60.0
        assert config.cache.max_entries == 100
        assert config.field_weights == DEFAULT_FIELD_WEIGHTS

    def test_file_field_weights_replace_defaults(self, tmp_path):
        path = write_config(tmp_path, {"field_weights": {"name": 3, "description": 1}})
        config = ConfigManager(path).load()
        assert config.field_weights == {"name": 3.0, "description": 1.0}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(str(tmp_path / "missing.json")).load()
        assert exc_info.value.error_code == "configuration"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigManager(str(path)).load()

    def test_invalid_value_reports_key(self, tmp_path):
        path = write_config(tmp_path, {"pagination": {"page_size": 0}})

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(path).load()

        assert exc_info.value.config_key == "pagination.page_size"
        assert isinstance(exc_info.value, SearchEngineError)

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CATALOG_SEARCH_CACHE_TTL", "120")
        monkeypatch.setenv("CATALOG_SEARCH_CACHE_ENABLED", "false")
        monkeypatch.setenv("CATALOG_SEARCH_PAGE_SIZE", "20")
        monkeypatch.setenv("CATALOG_SEARCH_LANGUAGE", "en")
        path = write_config(tmp_path, {"cache": {"ttl_seconds": 60}})

        config = ConfigManager(path).load()

        assert config.cache.ttl_seconds == 120.0
        assert config.cache.enabled is False
        assert config.pagination.page_size == 20
        assert config.normalization.language == "en"

    def test_env_bool_values(self, monkeypatch):
        monkeypatch.setenv("CATALOG_SEARCH_SUGGESTIONS_ENABLED", "yes")
        assert ConfigManager().load().suggestions.enabled is True

    def test_bad_env_number(self, monkeypatch):
        monkeypatch.setenv("CATALOG_SEARCH_CACHE_MAX_ENTRIES", "lots")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load()

        assert exc_info.value.config_key == "cache.max_entries"

    def test_save_template_round_trip(self, tmp_path):
        path = tmp_path / "template.json"
        ConfigManager().save_template(str(path))

        with open(path, encoding="utf-8") as f:
            template = json.load(f)

        assert template["pagination"]["page_size"] == 12
        assert ConfigManager(str(path)).load() == SearchEngineConfig()
