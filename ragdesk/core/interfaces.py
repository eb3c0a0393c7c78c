"""
Capability interfaces.

Abstract seams between core logic and provider adapters. Core services
depend only on these; concrete adapters live under ragdesk.boundary.

Dependencies: abc (stdlib)
System role: Dependency inversion for embedding, search, completion and metadata
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from ragdesk.models.document import QueryResult, SearchFilters
from ragdesk.models.vector import EmbeddingVector


class TextEmbedder(ABC):
    """Turns a single text into a fixed-dimension vector."""

    @abstractmethod
    async def embed_text(self, text: str) -> list[float]:
        """Return the embedding for text. Raises on provider failure."""
        pass


class VectorSearcher(ABC):
    """Filtered nearest-neighbour search over the vector index."""

    @abstractmethod
    async def search(
        self,
        query_vector: list[float],
        areas: list[str] | None = None,
        top_k: int = 5,
        filters: SearchFilters | None = None,
    ) -> QueryResult:
        pass

    @abstractmethod
    async def ping(self) -> bool:
        pass


class VectorUpserter(ABC):
    """Batched writes into the vector index."""

    @abstractmethod
    async def upsert(self, vectors: list[EmbeddingVector]) -> None:
        pass

    @abstractmethod
    async def ping(self) -> bool:
        pass


class CompletionClient(ABC):
    """Chat completion for grounded answers and question summaries."""

    @abstractmethod
    async def complete(
        self,
        question: str,
        context: str,
        system_prompt: str | None = None,
    ) -> str:
        pass

    @abstractmethod
    async def summarize_question(self, question: str) -> str:
        pass


class MetadataStore(ABC):
    """Persistent store of external document records."""

    @abstractmethod
    async def fetch_all(self) -> list[dict[str, Any]]:
        pass

    @abstractmethod
    async def fetch_by_id(self, document_id: str) -> dict[str, Any] | None:
        pass

    @abstractmethod
    async def save_signed_url(
        self,
        document_id: str,
        signed_url: str,
        expires_at: datetime,
    ) -> None:
        pass


class UrlSigner(ABC):
    """Issues time-limited download URLs for stored objects."""

    @abstractmethod
    async def sign(self, storage_path: str, expires_in: int) -> tuple[str, datetime]:
        """Return (url, expires_at) for the object at storage_path."""
        pass
