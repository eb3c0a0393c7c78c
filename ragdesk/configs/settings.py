"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides a cached factory used by the service container.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from ragdesk.configs.base import BaseSettings
from ragdesk.configs.cache import CacheSettings
from ragdesk.configs.database import DatabaseSettings
from ragdesk.configs.llm import LLMSettings
from ragdesk.configs.pipeline import PipelineSettings
from ragdesk.configs.s3_documents import S3DocumentsSettings
from ragdesk.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    llm: LLMSettings = LLMSettings()
    vector_store: VectorStoreSettings = VectorStoreSettings()
    pipeline: PipelineSettings = PipelineSettings()
    s3_documents: S3DocumentsSettings = S3DocumentsSettings()
    cache: CacheSettings = CacheSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from ragdesk.configs import get_settings
        settings = get_settings()
    """
    return Settings()
