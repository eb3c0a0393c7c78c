"""
Search result domain models.

DocumentRecord is a single vector search hit; QueryResult wraps a ranked set
of hits together with the index, partition and filters used.

Dependencies: pydantic
System role: Retrieval result contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class SearchFilters(BaseModel):
    """Optional metadata filter dimensions. Empty lists mean no constraint."""

    area: list[str] = Field(default_factory=list)
    category: list[str] = Field(default_factory=list)
    source: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.area or self.category or self.source or self.tags)


class DocumentRecord(BaseModel):
    """Single hit returned by a vector search."""

    id: str = Field(description="Vector id")
    text: str = Field(description="Chunk text stored with the vector")
    source: str = Field(description="Source filename")
    page: str = Field(default="N/A", description="Page label")
    score: float = Field(default=0.0, description="Similarity, higher is more similar")
    chunk_id: str | None = Field(default=None, description="Optional chunk identifier")
    metadata: dict[str, Any] | None = Field(default=None, description="Raw vector metadata")

    @staticmethod
    def extract_page_info(metadata: dict[str, Any]) -> str:
        """
        Derive a page label from vector metadata.

        Prefers `page`, then `page_number`. Falls back to an estimate from a
        numeric `chunk_id` (about two chunks per page), else "N/A".
        """
        if metadata.get("page") is not None:
            return str(metadata["page"])
        if metadata.get("page_number") is not None:
            return str(metadata["page_number"])
        if metadata.get("chunk_id") is not None:
            try:
                chunk_num = int(str(metadata["chunk_id"]))
            except ValueError:
                return "N/A"
            return f"~{chunk_num // 2 + 1}"
        return "N/A"

    @classmethod
    def from_metadata(
        cls,
        vector_id: str,
        metadata: dict[str, Any] | None,
        score: float,
    ) -> "DocumentRecord":
        """Build a record from a raw match, with defaults for missing fields."""
        metadata = metadata or {}
        text = metadata.get("text")
        filename = metadata.get("filename")
        chunk_id = metadata.get("chunk_id")
        return cls(
            id=vector_id,
            text=str(text) if text else "Not available",
            source=str(filename) if filename else "Unknown",
            page=cls.extract_page_info(metadata),
            score=score,
            chunk_id=str(chunk_id) if chunk_id is not None else None,
            metadata=metadata,
        )


class QueryResult(BaseModel):
    """Ranked search results with the index, partition and filters used."""

    query: str
    total_results: int
    documents: list[DocumentRecord] = Field(default_factory=list)
    index_used: str = ""
    areas_used: list[str] = Field(default_factory=list)
    filters_applied: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def create(
        cls,
        query: str,
        documents: list[DocumentRecord],
        index_used: str,
        areas_used: list[str] | None = None,
        filters_applied: dict[str, Any] | None = None,
    ) -> "QueryResult":
        """Create a result whose total_results matches the document count."""
        return cls(
            query=query,
            total_results=len(documents),
            documents=documents,
            index_used=index_used,
            areas_used=areas_used or [],
            filters_applied=filters_applied or {},
        )

    @classmethod
    def empty(cls, query: str = "") -> "QueryResult":
        return cls.create(query=query, documents=[], index_used="")

    @property
    def sources(self) -> list[str]:
        """Distinct source names in rank order."""
        return list(dict.fromkeys(doc.source for doc in self.documents))
