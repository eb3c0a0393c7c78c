"""
Chat service for document Q&A with RAG.

Turns a ChatRequest into a ChatResponse: builds search filters, runs the
retrieval orchestrator and the question summary concurrently, and maps the
retrieved documents to response sources with their signed download URLs.

Dependencies: ragdesk.core.retrieval, ragdesk.application.services.metadata_cache
System role: Chat service orchestration layer
"""

import asyncio
import logging
from datetime import datetime, timezone

from ragdesk.application.services.metadata_cache import ExternalMetadataCache
from ragdesk.core.interfaces import CompletionClient
from ragdesk.core.retrieval.orchestrator import RetrievalOrchestrator
from ragdesk.core.retrieval.prompts import ASSISTANT_SYSTEM_PROMPT
from ragdesk.models.chat import ChatRequest, ChatResponse, Source
from ragdesk.models.document import DocumentRecord, SearchFilters

logger = logging.getLogger(__name__)


def to_source(document: DocumentRecord, cache: ExternalMetadataCache) -> Source:
    """
    Map a search hit to a response source.

    The document id comes from the vector metadata, falling back to the hit
    id; the signed URL comes from the cached record when there is one.
    """
    metadata = document.metadata or {}
    document_id = str(metadata.get("documentId") or document.id)
    cached = cache.get(document_id)
    return Source(
        page=document.page,
        matching_text=document.text,
        source=document.source,
        document_id=document_id,
        score=str(document.score),
        signed_url=cached.signed_url if cached else "",
    )


class ChatService:
    """
    Chat service for single-turn document questions.

    Attributes:
        orchestrator: Retrieval and answer synthesis
        completion_client: Question summaries
        cache: Signed URL lookup for sources
        top_k: Number of fragments retrieved per question
    """

    def __init__(
        self,
        orchestrator: RetrievalOrchestrator,
        completion_client: CompletionClient,
        cache: ExternalMetadataCache,
        top_k: int = 10,
        system_prompt: str = ASSISTANT_SYSTEM_PROMPT,
    ) -> None:
        self.orchestrator = orchestrator
        self.completion_client = completion_client
        self.cache = cache
        self.top_k = top_k
        self.system_prompt = system_prompt

    @staticmethod
    def build_filters(request: ChatRequest) -> tuple[list[str] | None, SearchFilters]:
        """Split request filters into areas and the remaining dimensions."""
        areas = list(request.area) or None
        filters = SearchFilters(
            category=list(request.category),
            source=list(request.source),
            tags=list(request.tags),
        )
        return areas, filters

    async def _summarize(self, message: str) -> str:
        try:
            return await self.completion_client.summarize_question(message)
        except Exception as e:
            logger.warning(f"{__name__}:_summarize - Question summary failed: {e}")
            return ""

    async def process_message(self, request: ChatRequest) -> ChatResponse:
        """
        Answer a chat message.

        Args:
            request: Question and optional filters

        Returns:
            ChatResponse: Answer, UTC timestamp, sources and question summary
        """
        areas, filters = self.build_filters(request)
        logger.info(
            f"{__name__}:process_message - user={request.user_id}, "
            f"areas={areas or []}, filters={filters.model_dump(exclude_defaults=True)}"
        )

        answer, summary = await asyncio.gather(
            self.orchestrator.answer(
                request.message,
                areas=areas,
                top_k=self.top_k,
                filters=filters,
                system_prompt=self.system_prompt,
            ),
            self._summarize(request.message),
        )

        sources = [to_source(doc, self.cache) for doc in answer.query_result.documents]
        return ChatResponse(
            response=answer.answer,
            timestamp=datetime.now(timezone.utc).isoformat(),
            sources=sources,
            resume_question=summary,
            degraded=answer.degraded,
        )
