"""
Retrieval orchestrator.

Answers a question from indexed documents: embed the question, run a
filtered similarity search, assemble the context and ask the completion
client for a grounded answer. Fail-soft: errors become a degraded Answer.

Dependencies: ragdesk.core.embeddings, ragdesk.core.interfaces
System role: Query path of the RAG system
"""

import asyncio
import logging

from ragdesk.core.embeddings.generator import EmbeddingGenerator
from ragdesk.core.interfaces import CompletionClient, VectorSearcher
from ragdesk.core.retrieval.prompts import (
    FAILURE_ANSWER,
    NO_RESULTS_ANSWER,
    format_context_entry,
)
from ragdesk.models.chat import Answer, HealthStatus
from ragdesk.models.document import DocumentRecord, QueryResult, SearchFilters

logger = logging.getLogger(__name__)


def build_context(documents: list[DocumentRecord]) -> str:
    """Join retrieved fragments into the CONTEXT block, best hit first."""
    return "\n\n".join(
        format_context_entry(doc.source, doc.page, doc.text) for doc in documents
    )


class RetrievalOrchestrator:
    """
    Question answering over the vector index.

    Attributes:
        embedding_generator: Embeds the question
        vector_store: Similarity search
        completion_client: Answer synthesis
    """

    def __init__(
        self,
        embedding_generator: EmbeddingGenerator,
        vector_store: VectorSearcher,
        completion_client: CompletionClient,
    ) -> None:
        self.embedding_generator = embedding_generator
        self.vector_store = vector_store
        self.completion_client = completion_client

    async def answer(
        self,
        question: str,
        areas: list[str] | None = None,
        top_k: int = 10,
        filters: SearchFilters | None = None,
        system_prompt: str | None = None,
    ) -> Answer:
        """
        Answer a question from the indexed documents.

        Never raises. A failure in any stage returns the generic failure
        answer with degraded=True and a diagnostic.

        Args:
            question: User question
            areas: Area filter values
            top_k: Maximum number of fragments used as context
            filters: Category, source and tag filters
            system_prompt: Override for the default system prompt

        Returns:
            Answer: Answer text with the search result it is grounded on
        """
        logger.info(f"{__name__}:answer - Processing question of {len(question)} chars")

        try:
            query_vector = await self.embedding_generator.embed(question)
            query_result = await self.vector_store.search(
                query_vector,
                areas=areas,
                top_k=top_k,
                filters=filters,
            )
            query_result = query_result.model_copy(update={"query": question})

            if not query_result.documents:
                logger.info(f"{__name__}:answer - No relevant documents found")
                return Answer(
                    question=question,
                    answer=NO_RESULTS_ANSWER,
                    query_result=query_result,
                    context_used="",
                    total_documents_found=0,
                )

            context = build_context(query_result.documents)
            logger.info(
                f"{__name__}:answer - Built context from "
                f"{len(query_result.documents)} documents ({len(context)} chars)"
                f", sources {query_result.sources}"
            )

            reply = await self.completion_client.complete(question, context, system_prompt)

        except Exception as e:
            logger.exception(f"{__name__}:answer - Retrieval failed: {type(e).__name__}: {e}")
            return Answer(
                question=question,
                answer=FAILURE_ANSWER,
                query_result=QueryResult.empty(question),
                degraded=True,
                diagnostic=f"{type(e).__name__}: {e}",
            )

        return Answer(
            question=question,
            answer=reply.strip(),
            query_result=query_result,
            context_used=context,
            total_documents_found=query_result.total_results,
        )

    async def health_check(self) -> HealthStatus:
        """Probe the embedding provider and the vector index concurrently."""
        try:
            embeddings_ok, vector_store_ok = await asyncio.gather(
                self.embedding_generator.ping(),
                self.vector_store.ping(),
            )
        except Exception as e:
            logger.error(f"{__name__}:health_check - Health check failed: {e}")
            return HealthStatus(embeddings=False, vector_store=False, overall=False)

        return HealthStatus(
            embeddings=embeddings_ok,
            vector_store=vector_store_ok,
            overall=embeddings_ok and vector_store_ok,
        )
