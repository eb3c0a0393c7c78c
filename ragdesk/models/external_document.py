"""
External document metadata model.

Snapshot of a document record from the metadata store, including its
time-limited signed download URL.

Dependencies: pydantic
System role: Cached document metadata for response mapping
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ExternalDocumentMeta(BaseModel):
    """Immutable document record; replaced whole, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str
    signed_url: str = Field(default="", description="Signed download URL, empty if unavailable")
    file_name: str | None = None
    file_size: int | None = None
    content_type: str | None = None
    storage_path: str | None = None
    signed_url_expires_at: datetime | None = None
    alias: str | None = None
    description: str | None = None
    area: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def has_signed_url(self) -> bool:
        return bool(self.signed_url)


class CacheStats(BaseModel):
    """Point-in-time statistics of the metadata cache."""

    total_documents: int
    total_size: int
    average_size: float
    last_updated: datetime | None
    cache_age_ms: float
    documents_with_signed_urls: int
    documents_without_signed_urls: int
