"""
Ingestion pipeline settings.

Chunking geometry and embedding throttling for document ingestion.

Dependencies: pydantic, pydantic_settings
System role: Ingestion pipeline configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=100,
        description="Overlap between consecutive chunks",
    )
    boundary_window: int = Field(
        default=200,
        description="Lookback window when searching for a clean chunk end",
    )
    align_window: int = Field(
        default=60,
        description="Lookback window when aligning the next chunk start",
    )

    # Embedding throttling
    embedding_interval_s: float = Field(
        default=0.1,
        description="Minimum spacing between embedding calls in seconds",
    )
