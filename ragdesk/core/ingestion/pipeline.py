"""
Document ingestion pipeline.

Chunks and embeds each page of an already-extracted document, attaches
filterable metadata to every vector and upserts the whole document in one
call. Fail-fast: the first error aborts the upload.

Pipeline states:
    RECEIVED -> TEXT_EXTRACTED -> CHUNKED_AND_EMBEDDED -> UPSERTED -> DONE
    (any state) -> FAILED

Dependencies: ragdesk.core.embeddings, ragdesk.boundary.vdb
System role: Upload path from page text to stored vectors
"""

import asyncio
import logging
import time
from datetime import datetime, timezone

from ragdesk.boundary.vdb.vector_schemas import VectorMetadata
from ragdesk.core.embeddings.generator import EmbeddingGenerator
from ragdesk.core.exceptions import IngestionError, MismatchError, NoTextError
from ragdesk.core.interfaces import VectorUpserter
from ragdesk.core.text.sanitizer import sanitize_text, sanitize_values
from ragdesk.models.chat import HealthStatus
from ragdesk.models.ingestion import (
    IngestionState,
    PageText,
    UploadMetadata,
    UploadSummary,
)
from ragdesk.models.vector import EmbeddingVector, build_vector_id
from ragdesk.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """
    Per-document ingestion orchestrator.

    Usage:
        pipeline = IngestionPipeline(embedding_generator, vector_store)
        summary = await pipeline.ingest(pages, "guide.pdf", document_id)
    """

    def __init__(
        self,
        embedding_generator: EmbeddingGenerator,
        vector_store: VectorUpserter,
        max_chunk_size: int = 1000,
        overlap_size: int = 100,
    ) -> None:
        """
        Args:
            embedding_generator: Chunks and embeds page text
            vector_store: Destination of the vectors
            max_chunk_size: Chunk size used for every page
            overlap_size: Chunk overlap used for every page
        """
        self.embedding_generator = embedding_generator
        self.vector_store = vector_store
        self.max_chunk_size = max_chunk_size
        self.overlap_size = overlap_size

    def _transition(self, document_id: str, state: IngestionState) -> IngestionState:
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ingest - {document_id} -> {state.value}",
            document_id=document_id,
            state=state.value,
        )
        return state

    async def ingest(
        self,
        pages: list[PageText],
        filename: str,
        document_id: str,
        metadata: UploadMetadata | None = None,
    ) -> UploadSummary:
        """
        Ingest a document given its per-page text.

        Args:
            pages: Extracted page texts in page order
            filename: Original filename, stored with every vector
            document_id: Trusted document identifier (UUID v4)
            metadata: Optional user id and filter tags

        Returns:
            UploadSummary: Counts and processing time

        Raises:
            NoTextError: When every page is blank
            MismatchError: When a page's chunk and embedding counts differ
            IngestionError: For any other failure, chained to its cause
        """
        metadata = metadata or UploadMetadata()
        started = time.perf_counter()
        state = self._transition(document_id, IngestionState.RECEIVED)

        try:
            text_pages = [page for page in pages if page.text and page.text.strip()]
            if not text_pages:
                raise NoTextError(
                    "No text content found in document",
                    document_id=document_id,
                    details={"total_pages": len(pages)},
                )
            state = self._transition(document_id, IngestionState.TEXT_EXTRACTED)

            vectors = await self._build_vectors(text_pages, filename, document_id, metadata)

            total_chunks = len(vectors)
            for vector in vectors:
                vector.metadata["totalChunks"] = total_chunks
            state = self._transition(document_id, IngestionState.CHUNKED_AND_EMBEDDED)

            await self.vector_store.upsert(vectors)
            state = self._transition(document_id, IngestionState.UPSERTED)

        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            failed_in = state
            self._transition(document_id, IngestionState.FAILED)
            log_exception_with_context(
                logger,
                f"{__name__}:ingest - Failed processing {filename} after {elapsed_ms:.0f}ms",
                e,
                document_id=document_id,
                filename=filename,
                state=failed_in.value,
                elapsed_ms=round(elapsed_ms),
            )
            if isinstance(e, IngestionError):
                raise
            raise IngestionError(
                f"Failed to process document: {e}",
                document_id=document_id,
                details={"filename": filename, "state": failed_in.value},
            ) from e

        processing_time_ms = (time.perf_counter() - started) * 1000
        self._transition(document_id, IngestionState.DONE)
        logger.info(
            f"{__name__}:ingest - Stored {total_chunks} chunks for {filename} "
            f"in {processing_time_ms:.0f}ms"
        )
        return UploadSummary(
            document_id=document_id,
            chunks_processed=total_chunks,
            filename=filename,
            total_pages=len(pages),
            processing_time_ms=processing_time_ms,
        )

    async def _build_vectors(
        self,
        pages: list[PageText],
        filename: str,
        document_id: str,
        metadata: UploadMetadata,
    ) -> list[EmbeddingVector]:
        """Chunk and embed every page; chunk indexes run across pages."""
        user_id = sanitize_text(metadata.user_id) or None
        area = sanitize_values(metadata.area)
        category = sanitize_values(metadata.category)
        source = sanitize_values(metadata.source)
        tags = sanitize_values(metadata.tags)

        vectors: list[EmbeddingVector] = []
        chunk_index = 0
        for page in pages:
            processed = await self.embedding_generator.process_document(
                page.text,
                max_chunk_size=self.max_chunk_size,
                overlap_size=self.overlap_size,
            )
            if len(processed.chunks) != len(processed.embeddings):
                raise MismatchError(
                    chunk_count=len(processed.chunks),
                    embedding_count=len(processed.embeddings),
                    page_number=page.page_number,
                    document_id=document_id,
                )

            for chunk, embedding in zip(processed.chunks, processed.embeddings):
                vector_metadata = VectorMetadata(
                    document_id=document_id,
                    filename=filename,
                    chunk_index=chunk_index,
                    page=page.page_number,
                    page_number=page.page_number,
                    text=sanitize_text(chunk),
                    upload_date=datetime.now(timezone.utc).isoformat(),
                    user_id=user_id,
                    area=area,
                    category=category,
                    source=source,
                    tags=tags,
                )
                vectors.append(
                    EmbeddingVector(
                        id=build_vector_id(document_id, chunk_index),
                        values=embedding,
                        metadata=vector_metadata.to_index_metadata(),
                    )
                )
                chunk_index += 1

            logger.debug(
                f"{__name__}:_build_vectors - Page {page.page_number}: "
                f"{len(processed.chunks)} chunks"
            )

        return vectors

    async def health_check(self) -> HealthStatus:
        """Probe the embedding provider and the vector index concurrently."""
        embeddings_ok, vector_store_ok = await asyncio.gather(
            self.embedding_generator.ping(),
            self.vector_store.ping(),
        )
        status = HealthStatus(
            embeddings=embeddings_ok,
            vector_store=vector_store_ok,
            overall=embeddings_ok and vector_store_ok,
        )
        logger.info(f"{__name__}:health_check - {status}")
        return status
