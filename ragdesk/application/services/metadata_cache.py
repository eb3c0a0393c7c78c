"""
External document metadata cache.

Process-wide snapshot of document records used to attach signed download
URLs to answer sources. Owned by the service container and injected where
needed. Reads return new lists; records are frozen models.

Dependencies: ragdesk.models.external_document
System role: In-memory document metadata for response mapping
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Protocol

from ragdesk.models.external_document import CacheStats, ExternalDocumentMeta

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_MS = 5 * 60 * 1000


class DocumentLoader(Protocol):
    async def load_all(self) -> list[ExternalDocumentMeta]: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExternalMetadataCache:
    """
    Snapshot of external document records.

    Expects a single writer during reload; any number of readers.
    """

    def __init__(
        self,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._documents: list[ExternalDocumentMeta] = []
        self._last_updated: datetime | None = None
        self._max_age_ms = max_age_ms
        self._clock = clock

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    def __len__(self) -> int:
        return len(self._documents)

    async def load(self, loader: DocumentLoader) -> None:
        """
        Replace the snapshot with freshly loaded records.

        On failure the cache is cleared to empty and the error is logged;
        this method does not raise.
        """
        try:
            documents = await loader.load_all()
        except Exception as e:
            logger.exception(f"{__name__}:load - Failed to load documents: {e}")
            self.set_documents([])
            return
        self.set_documents(documents)

    def set_documents(self, documents: list[ExternalDocumentMeta]) -> None:
        """Replace the snapshot and stamp last_updated."""
        self._documents = list(documents)
        self._last_updated = self._clock()

        with_urls = len(self.with_signed_urls())
        logger.info(
            f"{__name__}:set_documents - Cache updated with {len(documents)} documents, "
            f"{with_urls} with signed URLs"
        )
        if with_urls != len(documents):
            logger.warning(
                f"{__name__}:set_documents - {len(documents) - with_urls} documents "
                f"have no signed URL"
            )

    def list_documents(self) -> list[ExternalDocumentMeta]:
        return list(self._documents)

    def get(self, document_id: str) -> ExternalDocumentMeta | None:
        for doc in self._documents:
            if doc.id == document_id:
                return doc
        return None

    def search_by_name(self, query: str) -> list[ExternalDocumentMeta]:
        """Case-insensitive substring match on file_name."""
        needle = query.lower()
        return [
            doc for doc in self._documents
            if doc.file_name and needle in doc.file_name.lower()
        ]

    def is_expired(self, max_age_ms: int | None = None) -> bool:
        """True when never loaded or older than max_age_ms."""
        if self._last_updated is None:
            return True
        limit = self._max_age_ms if max_age_ms is None else max_age_ms
        return self._age_ms() > limit

    def upsert(self, document: ExternalDocumentMeta) -> None:
        """Replace the record with the same id, or append it."""
        for i, doc in enumerate(self._documents):
            if doc.id == document.id:
                self._documents[i] = document
                logger.debug(f"{__name__}:upsert - Updated {document.id}")
                return
        self._documents.append(document)
        logger.debug(f"{__name__}:upsert - Added {document.id}")

    def remove(self, document_id: str) -> bool:
        before = len(self._documents)
        self._documents = [doc for doc in self._documents if doc.id != document_id]
        removed = len(self._documents) < before
        if removed:
            logger.debug(f"{__name__}:remove - Removed {document_id}")
        return removed

    def clear(self) -> None:
        self._documents = []
        self._last_updated = None
        logger.info(f"{__name__}:clear - Cache cleared")

    def with_signed_urls(self) -> list[ExternalDocumentMeta]:
        return [doc for doc in self._documents if doc.has_signed_url]

    def without_signed_urls(self) -> list[ExternalDocumentMeta]:
        return [doc for doc in self._documents if not doc.has_signed_url]

    def stats(self) -> CacheStats:
        total_size = sum(doc.file_size or 0 for doc in self._documents)
        count = len(self._documents)
        with_urls = len(self.with_signed_urls())
        return CacheStats(
            total_documents=count,
            total_size=total_size,
            average_size=total_size / count if count else 0.0,
            last_updated=self._last_updated,
            cache_age_ms=self._age_ms() if self._last_updated else 0.0,
            documents_with_signed_urls=with_urls,
            documents_without_signed_urls=count - with_urls,
        )

    def _age_ms(self) -> float:
        return (self._clock() - self._last_updated).total_seconds() * 1000
