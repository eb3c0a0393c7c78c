"""
Metadata cache configuration.

Dependencies: pydantic_settings
System role: External document cache freshness settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """External document cache settings."""

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        case_sensitive=False,
        extra="ignore",
    )

    max_age_ms: int = Field(
        default=5 * 60 * 1000,
        description="Age after which the cached snapshot counts as expired",
    )
