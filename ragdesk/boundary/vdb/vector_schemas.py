"""
Vector database schemas.

Pydantic models for the metadata stored with each vector and for search
requests. Field aliases are the camelCase keys persisted in the index.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ragdesk.models.document import SearchFilters


class VectorMetadata(BaseModel):
    """
    Metadata attached to each chunk vector.

    `area`, `category`, `source` and `tags` are filterable; empty lists are
    omitted from the stored metadata.
    """

    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(alias="documentId", description="Owning document")
    filename: str = Field(description="Original filename")
    chunk_index: int = Field(alias="chunkIndex", description="Global chunk index")
    total_chunks: int = Field(default=0, alias="totalChunks", description="Chunks in the document")
    page: int = Field(description="Source page number")
    page_number: int = Field(description="Source page number (legacy key)")
    text: str = Field(description="Sanitized chunk text")
    upload_date: str = Field(alias="uploadDate", description="ISO 8601 UTC upload time")
    user_id: str | None = Field(default=None, alias="userId")
    area: list[str] = Field(default_factory=list)
    category: list[str] = Field(default_factory=list)
    source: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    def to_index_metadata(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping empty optional values."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        for key in ("area", "category", "source", "tags"):
            if not data.get(key):
                data.pop(key, None)
        if not data.get("userId"):
            data.pop("userId", None)
        return data


class VectorQuery(BaseModel):
    """Parameters of a nearest-neighbour search."""

    embedding: list[float] = Field(description="Query embedding vector")
    top_k: int = Field(default=5, ge=1, le=100, description="Number of results to return")
    areas: list[str] | None = Field(default=None, description="Area filter values")
    filters: SearchFilters | None = Field(default=None, description="Other filter dimensions")
