"""
Embedding vector model.

Vector record written to the vector index during ingestion.

Dependencies: pydantic
System role: Unit of work for vector upserts
"""

from typing import Any

from pydantic import BaseModel, Field


def build_vector_id(document_id: str, chunk_index: int) -> str:
    """Deterministic vector id for the chunk at chunk_index of a document."""
    return f"{document_id}_chunk_{chunk_index}"


class EmbeddingVector(BaseModel):
    """Embedding with deterministic id and attached metadata."""

    id: str = Field(description="Deterministic id: <documentId>_chunk_<index>")
    values: list[float] = Field(description="Embedding values")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Filterable metadata")
