"""
Ingestion domain models.

Inputs and outputs of the ingestion pipeline: per-page text, user-supplied
tags, and the upload summary.

Dependencies: pydantic
System role: Ingestion pipeline contracts
"""

import enum

from pydantic import BaseModel, Field


class IngestionState(str, enum.Enum):
    """
    Ingestion lifecycle states for a single document.

    RECEIVED: Request accepted, nothing processed yet
    TEXT_EXTRACTED: Page text validated as non-empty
    CHUNKED_AND_EMBEDDED: All vectors built and stamped
    UPSERTED: Vectors written to the index
    DONE: Summary returned
    FAILED: Terminal failure; error propagated to caller
    """

    RECEIVED = "received"
    TEXT_EXTRACTED = "text_extracted"
    CHUNKED_AND_EMBEDDED = "chunked_and_embedded"
    UPSERTED = "upserted"
    DONE = "done"
    FAILED = "failed"


class PageText(BaseModel):
    """Plain text of one page, as handed over by the extraction step."""

    page_number: int = Field(description="1-based page number")
    text: str = Field(default="", description="Page text")


class UploadMetadata(BaseModel):
    """Optional tags attached to every vector of an upload."""

    user_id: str | None = None
    area: list[str] = Field(default_factory=list)
    category: list[str] = Field(default_factory=list)
    source: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class UploadSummary(BaseModel):
    """Result of a successful ingestion."""

    document_id: str = Field(description="Document identifier")
    chunks_processed: int = Field(description="Number of vectors written")
    filename: str = Field(description="Original filename")
    total_pages: int = Field(description="Number of pages received")
    processing_time_ms: float = Field(description="End-to-end processing time")


class ProcessedText(BaseModel):
    """Chunks of a text and their embeddings, index-aligned."""

    chunks: list[str]
    embeddings: list[list[float]]
