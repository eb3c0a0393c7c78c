"""
Domain models.

Pydantic models shared across ingestion, retrieval and response mapping.
"""

from ragdesk.models.chat import Answer, ChatRequest, ChatResponse, HealthStatus, Source
from ragdesk.models.chunk import Chunk
from ragdesk.models.document import DocumentRecord, QueryResult, SearchFilters
from ragdesk.models.external_document import CacheStats, ExternalDocumentMeta
from ragdesk.models.ingestion import (
    IngestionState,
    PageText,
    ProcessedText,
    UploadMetadata,
    UploadSummary,
)
from ragdesk.models.vector import EmbeddingVector, build_vector_id

__all__ = [
    "Answer",
    "CacheStats",
    "ChatRequest",
    "ChatResponse",
    "Chunk",
    "DocumentRecord",
    "EmbeddingVector",
    "ExternalDocumentMeta",
    "HealthStatus",
    "IngestionState",
    "PageText",
    "ProcessedText",
    "QueryResult",
    "SearchFilters",
    "Source",
    "UploadMetadata",
    "UploadSummary",
    "build_vector_id",
]
