"""
Exception hierarchy for the ragdesk application.

Provides layered exception structure for ingestion, retrieval and
metadata errors. All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagDeskException(Exception):
    """Base exception for all ragdesk application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RagDeskException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class EmptyInputError(ValidationError):
    """Raised when text to embed is empty or whitespace only."""

    def __init__(self, message: str = "Text cannot be empty") -> None:
        super().__init__(message, field="text")


class EmptyBatchError(ValidationError):
    """Raised when an embedding or upsert batch is empty."""

    def __init__(self, message: str = "Batch cannot be empty", field: str | None = None) -> None:
        super().__init__(message, field=field)


class ProviderError(RagDeskException):
    """Raised when the embedding or completion provider fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Provider operation that failed (embedding, completion)
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class ChunkingError(RagDeskException):
    """Raised when chunking produces no usable chunks."""

    pass


class VectorStoreError(RagDeskException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, ping)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class IngestionError(RagDeskException):
    """Base exception for document ingestion failures."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class NoTextError(IngestionError):
    """Raised when no page carries extractable text."""

    pass


class MismatchError(IngestionError):
    """Raised when a page's chunk and embedding counts differ."""

    def __init__(
        self,
        chunk_count: int,
        embedding_count: int,
        page_number: int,
        document_id: str | None = None,
    ) -> None:
        """
        Initialize mismatch error.

        Args:
            chunk_count: Number of chunks produced for the page
            embedding_count: Number of embeddings returned for the page
            page_number: Page where the mismatch happened
            document_id: ID of the document being ingested
        """
        super().__init__(
            f"Mismatch between chunks ({chunk_count}) and embeddings "
            f"({embedding_count}) on page {page_number}",
            document_id=document_id,
            details={"page": page_number},
        )


class MetadataStoreError(RagDeskException):
    """Raised when the document metadata store cannot be read or written."""

    pass
