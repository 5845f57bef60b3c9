"""Centralized configuration using Pydantic Settings.

Single source of truth for the API endpoint, index behaviour, search
session behaviour and logging. Every value can be overridden via
environment variables:
- JS_API_BASE_URL=https://booking.example.com
- JS_API_TIMEOUT_SECONDS=5
- JS_INDEX_STATION_MARKER=站
- JS_SEARCH_DROP_STALE_RESPONSES=true
- JS_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiConfig(BaseSettings):
    """Booking backend configuration.

    Environment variables prefixed with JS_API_.
    """

    model_config = SettingsConfigDict(env_prefix="JS_API_")

    base_url: str = "http://localhost:8080"
    timeout_seconds: float = 10.0
    session_token: Optional[str] = None
    city_path: str = "/api/general/city"
    station_path: str = "/api/general/city_stations"
    direct_query_path: str = "/api/train/schedule/query_direct"
    transfer_query_path: str = "/api/train/schedule/query_indirect"


class IndexConfig(BaseSettings):
    """Location index configuration.

    Environment variables prefixed with JS_INDEX_.
    """

    model_config = SettingsConfigDict(env_prefix="JS_INDEX_")

    station_marker: str = "站"
    transliteration: Literal["pinyin", "ascii_fold"] = "pinyin"
    groups_ttl_seconds: Optional[float] = 3600.0
    suggestion_limit: int = 10
    fuzzy_min_score: int = 70

    @field_validator("station_marker")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("station_marker must be exactly one character")
        return value


class SearchConfig(BaseSettings):
    """Search session configuration.

    Environment variables prefixed with JS_SEARCH_.
    """

    model_config = SettingsConfigDict(env_prefix="JS_SEARCH_")

    # False keeps the historical "last response wins" behaviour.
    drop_stale_responses: bool = False
    loading_placeholder: str = "加载中..."
    other_train_type_label: str = "其他"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with JS_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="JS_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.api.base_url)
        print(config.index.station_marker)

    Environment variables prefixed with JS_.
    """

    model_config = SettingsConfigDict(env_prefix="JS_")

    api: ApiConfig = Field(default_factory=ApiConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
