"""Configuration models and loading for the catalog search engine."""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError


DEFAULT_FIELD_WEIGHTS: Dict[str, float] = {
    "nome": 10.0,
    "descricao": 5.0,
    "categoria": 8.0,
    "tags": 7.0,
    "ingredientes": 6.0,
    "sabor": 7.0,
    "ocasiao": 4.0,
}


class NormalizationConfig(BaseModel):
    """Text normalization toggles."""

    lowercase: bool = True
    strip_accents: bool = True
    remove_stopwords: bool = True
    apply_stemming: bool = True
    language: Literal["pt", "en"] = "pt"
    min_token_length: int = Field(default=2, ge=1)

    model_config = ConfigDict(frozen=True)


class CacheConfig(BaseModel):
    """Query result cache settings."""

    enabled: bool = True
    max_entries: int = Field(default=100, ge=1)
    ttl_seconds: float = Field(default=3600.0, gt=0)

    model_config = ConfigDict(frozen=True)


class PaginationConfig(BaseModel):
    """Pagination defaults."""

    page_size: int = Field(default=12, ge=1)

    model_config = ConfigDict(frozen=True)


class SuggestionConfig(BaseModel):
    """"Did you mean" suggestion settings."""

    enabled: bool = True
    max_suggestions: int = Field(default=5, ge=0)
    max_distance: int = Field(default=2, ge=0)
    candidates_per_token: int = Field(default=3, ge=1)
    memo_size: int = Field(default=1000, ge=1)

    model_config = ConfigDict(frozen=True)


class SearchEngineConfig(BaseModel):
    """Complete engine configuration, immutable once constructed."""

    field_weights: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS))
    id_field: str = "id"
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    suggestions: SuggestionConfig = Field(default_factory=SuggestionConfig)

    model_config = ConfigDict(frozen=True)

    @field_validator("field_weights")
    @classmethod
    def _positive_weights(cls, value: Dict[str, float]) -> Dict[str, float]:
        for field_name, weight in value.items():
            if weight <= 0:
                raise ValueError(f"weight for field '{field_name}' must be positive, got {weight}")
        return value


class ConfigManager:
    """Manages configuration loading and validation."""

    DEFAULT_CONFIG: Dict[str, Any] = SearchEngineConfig().model_dump()

    ENV_OVERRIDES = {
        "CATALOG_SEARCH_CACHE_ENABLED": ("cache", "enabled", "bool"),
        "CATALOG_SEARCH_CACHE_TTL": ("cache", "ttl_seconds", "float"),
        "CATALOG_SEARCH_CACHE_MAX_ENTRIES": ("cache", "max_entries", "int"),
        "CATALOG_SEARCH_PAGE_SIZE": ("pagination", "page_size", "int"),
        "CATALOG_SEARCH_SUGGESTIONS_ENABLED": ("suggestions", "enabled", "bool"),
        "CATALOG_SEARCH_MAX_DISTANCE": ("suggestions", "max_distance", "int"),
        "CATALOG_SEARCH_LANGUAGE": ("normalization", "language", "str"),
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize config manager.

        Args:
            config_path: Path to a JSON config file. If None, uses defaults + env vars
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[SearchEngineConfig] = None

    def load(self) -> SearchEngineConfig:
        """Load configuration from file and environment."""
        if self._config:
            return self._config

        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path:
            if not self.config_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {self.config_path}",
                    context={"path": str(self.config_path)}
                )
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in config file {self.config_path}: {e}",
                    context={"path": str(self.config_path)}
                ) from e
            # A weight table in the file replaces the default one.
            if "field_weights" in file_config:
                config_dict["field_weights"] = {}
            config_dict = self._deep_merge(config_dict, file_config)

        load_dotenv()
        config_dict = self._apply_env_overrides(config_dict)

        try:
            self._config = SearchEngineConfig(**config_dict)
        except ValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            key = ".".join(str(part) for part in first.get("loc", ()))
            raise ConfigurationError(f"Invalid configuration: {e}", config_key=key or None) from e
        return self._config

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides."""
        for env_key, (section, key, kind) in self.ENV_OVERRIDES.items():
            raw = os.getenv(env_key)
            if raw is None or raw == "":
                continue

            if kind == "bool":
                value: Any = raw.lower() in ("true", "1", "yes")
            elif kind in ("int", "float"):
                try:
                    value = int(raw) if kind == "int" else float(raw)
                except ValueError as e:
                    raise ConfigurationError(
                        f"{env_key} must be a number, got {raw!r}",
                        config_key=f"{section}.{key}"
                    ) from e
            else:
                value = raw

            config.setdefault(section, {})[key] = value

        return config

    def save_template(self, path: str) -> None:
        """Save a configuration template file."""
        template = copy.deepcopy(self.DEFAULT_CONFIG)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(template, f, indent=2, ensure_ascii=False)
