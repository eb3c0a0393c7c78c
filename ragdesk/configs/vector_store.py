"""
Vector store configuration settings.

Manages S3 Vectors configuration for vector storage and retrieval,
including upsert batching and throttling.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """S3 Vectors configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    vectors_bucket: str = Field(
        default="ragdesk-vectors",
        description="S3 Vectors bucket name",
    )
    index_name: str = Field(
        default="documents",
        description="S3 Vectors index name (the queried partition)",
    )

    top_k: int = Field(default=10, description="Number of top results to retrieve")
    upsert_batch_size: int = Field(
        default=100,
        description="Maximum vectors per put_vectors call",
    )
    upsert_interval_s: float = Field(
        default=0.1,
        description="Minimum spacing between upsert batches in seconds",
    )
    max_retries: int = Field(
        default=3,
        description="Attempts per S3 Vectors call before giving up",
    )
    distance_metric: str = Field(
        default="cosine",
        description="Index distance metric (cosine or euclidean)",
    )
