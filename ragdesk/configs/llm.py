"""
Language model provider settings.

Settings for the Google Generative AI embedding and chat models used by
ingestion and retrieval.

Dependencies: pydantic, pydantic_settings
System role: Embedding and completion provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Embedding and chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google Generative AI API key (falls back to GOOGLE_API_KEY)",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Chat model used for grounded answers",
    )
    summary_model: str = Field(
        default="gemini-2.5-flash-lite",
        description="Chat model used for short question summaries",
    )
    temperature: float = Field(default=0.3, description="Answer sampling temperature")
    summary_max_tokens: int = Field(
        default=20,
        description="Token cap for question summaries",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension (must match the vector index)",
    )
