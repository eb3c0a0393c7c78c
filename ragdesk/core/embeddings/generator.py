"""
Embedding generator.

Turns text into fixed-dimension vectors through a TextEmbedder. Batches are
embedded one call at a time, spaced by a RequestThrottle, so output order
matches input order.

Dependencies: ragdesk.core.interfaces, ragdesk.core.text.chunker
System role: Embedding stage for ingestion and query embedding for retrieval
"""

import logging

from ragdesk.core.exceptions import (
    ChunkingError,
    EmptyBatchError,
    EmptyInputError,
    ProviderError,
)
from ragdesk.core.interfaces import TextEmbedder
from ragdesk.core.text.chunker import TextChunker
from ragdesk.core.throttle import RequestThrottle
from ragdesk.models.ingestion import ProcessedText

logger = logging.getLogger(__name__)

PING_TEXT = "health check"


class EmbeddingGenerator:
    """
    Sequential, throttled embedding of single texts, batches and documents.

    Attributes:
        embedder: Provider adapter producing vectors
        chunker: Chunker used by process_document
        throttle: Gate spacing consecutive provider calls in a batch
    """

    def __init__(
        self,
        embedder: TextEmbedder,
        chunker: TextChunker | None = None,
        throttle: RequestThrottle | None = None,
    ) -> None:
        self.embedder = embedder
        self.chunker = chunker or TextChunker()
        self.throttle = throttle or RequestThrottle()

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed, trimmed before the provider call

        Returns:
            list[float]: Embedding vector

        Raises:
            EmptyInputError: When text is empty or whitespace only
            ProviderError: When the provider fails or returns no vector
        """
        if not text or not text.strip():
            raise EmptyInputError()

        clean = text.strip()
        logger.debug(f"{__name__}:embed - Embedding text of {len(clean)} chars")

        try:
            vector = await self.embedder.embed_text(clean)
        except Exception as e:
            raise ProviderError(
                f"Failed to generate embedding: {e}",
                provider="embedding",
                details={"error_type": type(e).__name__},
            ) from e

        if not vector:
            raise ProviderError("Provider returned an empty embedding", provider="embedding")

        return list(vector)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts one at a time, in order.

        The first failure aborts the batch; partial results are discarded.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input text

        Raises:
            EmptyBatchError: When texts is empty
            EmptyInputError: When any text is blank
            ProviderError: When any provider call fails
        """
        if not texts:
            raise EmptyBatchError("Text chunks array cannot be empty", field="texts")

        logger.info(f"{__name__}:embed_batch - Embedding {len(texts)} texts")

        embeddings: list[list[float]] = []
        for i, text in enumerate(texts):
            async with self.throttle:
                logger.debug(f"{__name__}:embed_batch - Text {i + 1}/{len(texts)}")
                embeddings.append(await self.embed(text))

        logger.info(f"{__name__}:embed_batch - Completed {len(embeddings)} embeddings")
        return embeddings

    async def process_document(
        self,
        text: str,
        max_chunk_size: int | None = None,
        overlap_size: int | None = None,
    ) -> ProcessedText:
        """
        Chunk text and embed every chunk.

        Args:
            text: Page text
            max_chunk_size: Override for the chunker maximum
            overlap_size: Override for the chunker overlap

        Returns:
            ProcessedText: Chunks and their embeddings, index-aligned

        Raises:
            ChunkingError: When chunking yields no chunks
            ProviderError: When embedding fails
        """
        chunks = self.chunker.chunk(text, max_chunk_size, overlap_size)
        if not chunks:
            raise ChunkingError(
                "No valid chunks created from document",
                details={"text_length": len(text or "")},
            )

        embeddings = await self.embed_batch(chunks)
        logger.info(
            f"{__name__}:process_document - {len(chunks)} chunks, "
            f"{len(embeddings)} embeddings"
        )
        return ProcessedText(chunks=chunks, embeddings=embeddings)

    async def ping(self) -> bool:
        """Return True when the provider embeds a probe text."""
        try:
            await self.embed(PING_TEXT)
            return True
        except Exception as e:
            logger.warning(f"{__name__}:ping - Embedding provider unavailable: {e}")
            return False
