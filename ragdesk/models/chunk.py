"""
Chunk domain model.

Represents a bounded span of page text prepared for embedding.

Dependencies: pydantic
System role: Chunk data structure passed from chunker to embedder
"""

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Trimmed chunk text with its offsets in the source page."""

    text: str = Field(description="Trimmed chunk text")
    start_offset: int = Field(description="Start offset in the trimmed page text")
    end_offset: int = Field(description="End offset (exclusive) in the trimmed page text")
    page_number: int | None = Field(default=None, description="Source page number")
