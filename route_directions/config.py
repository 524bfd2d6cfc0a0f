"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- RD_CLASSIFIER_USE_DIRECTION_FLAG_OVERRIDES=false
- RD_ALIGN_MIN_SPLIT_SEGMENT_SCORE=3
- RD_ALIGN_STRICT_ALTERNATE_COLLISIONS=true
- RD_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClassifierConfig(BaseSettings):
    """Direction classifier configuration.

    Environment variables prefixed with RD_CLASSIFIER_.
    """

    model_config = SettingsConfigDict(env_prefix="RD_CLASSIFIER_")

    use_direction_flag_overrides: bool = True


class AlignmentConfig(BaseSettings):
    """Canonical sequence alignment configuration.

    Environment variables prefixed with RD_ALIGN_.
    """

    model_config = SettingsConfigDict(env_prefix="RD_ALIGN_")

    split_round_trips: bool = True
    min_split_segment_score: int = Field(default=2, ge=1)
    strict_alternate_collisions: bool = False


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with RD_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="RD_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.alignment.min_split_segment_score)

    Environment variables prefixed with RD_.
    """

    model_config = SettingsConfigDict(env_prefix="RD_")

    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    alignment: AlignmentConfig = Field(default_factory=AlignmentConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
