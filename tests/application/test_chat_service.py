"""
Test suite for ChatService.

Tests filter mapping, source construction with signed URLs and the
fail-soft question summary, with the orchestrator mocked out.

System role: Verification of the chat orchestration layer
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from ragdesk.application.services.chat_service import ChatService, to_source
from ragdesk.application.services.metadata_cache import ExternalMetadataCache
from ragdesk.models.chat import Answer, ChatRequest
from ragdesk.models.external_document import ExternalDocumentMeta


@pytest.fixture
def cache() -> ExternalMetadataCache:
    """Provide cache holding one document with a signed URL."""
    cache = ExternalMetadataCache()
    cache.set_documents([
        ExternalDocumentMeta(id="doc-1", signed_url="https://signed.example/doc-1"),
    ])
    return cache


@pytest.fixture
def orchestrator(document_factory, query_result_factory) -> MagicMock:
    """Provide orchestrator mock answering from two hits."""
    hits = [
        document_factory(id="doc-1_chunk_0", score=0.91, page="3", text="Twenty days."),
        document_factory(id="orphan_chunk_2", score=0.5, metadata={}),
    ]
    orchestrator = MagicMock()
    orchestrator.answer = AsyncMock(
        return_value=Answer(
            question="How many vacation days?",
            answer="You get twenty days.",
            query_result=query_result_factory(hits),
            total_documents_found=2,
        )
    )
    return orchestrator


@pytest.fixture
def service(orchestrator, mock_completion_client, cache) -> ChatService:
    return ChatService(orchestrator, mock_completion_client, cache, top_k=7, system_prompt="SP")


class TestBuildFilters:
    """Test suite for ChatService.build_filters()."""

    def test_build_filters_should_split_areas_from_other_dimensions(self) -> None:
        # Arrange
        request = ChatRequest(
            user_id="u1", message="q", area=["hr"], category=["policy"], tags=["2024"]
        )

        # Act
        areas, filters = ChatService.build_filters(request)

        # Assert
        assert areas == ["hr"]
        assert filters.area == []
        assert filters.category == ["policy"]
        assert filters.source == []
        assert filters.tags == ["2024"]

    def test_build_filters_should_return_none_without_areas(self) -> None:
        areas, filters = ChatService.build_filters(ChatRequest(user_id="u1", message="q"))
        assert areas is None
        assert filters.is_empty()


class TestToSource:
    """Test suite for to_source()."""

    def test_to_source_should_attach_cached_signed_url(
        self, cache: ExternalMetadataCache, document_factory
    ) -> None:
        source = to_source(document_factory(id="doc-1_chunk_4", score=0.75, page="2"), cache)
        assert source.document_id == "doc-1"
        assert source.signed_url == "https://signed.example/doc-1"
        assert source.score == "0.75"
        assert source.page == "2"

    def test_to_source_should_fall_back_to_hit_id_without_document_id(
        self, cache: ExternalMetadataCache, document_factory
    ) -> None:
        source = to_source(document_factory(id="orphan_chunk_2", metadata={}), cache)
        assert source.document_id == "orphan_chunk_2"
        assert source.signed_url == ""


class TestProcessMessage:
    """Test suite for ChatService.process_message()."""

    @pytest.mark.asyncio
    async def test_process_message_should_return_answer_sources_and_summary(
        self, service: ChatService, orchestrator: MagicMock
    ) -> None:
        # Arrange
        request = ChatRequest(user_id="u1", message="How many vacation days?", area=["hr"])

        # Act
        response = await service.process_message(request)

        # Assert
        assert response.response == "You get twenty days."
        assert response.resume_question == "Vacation policy question"
        assert response.degraded is False
        assert [s.document_id for s in response.sources] == ["doc-1", "orphan_chunk_2"]
        assert response.sources[0].signed_url == "https://signed.example/doc-1"
        assert datetime.fromisoformat(response.timestamp).tzinfo is not None

        kwargs = orchestrator.answer.await_args.kwargs
        assert kwargs["areas"] == ["hr"]
        assert kwargs["top_k"] == 7
        assert kwargs["system_prompt"] == "SP"

    @pytest.mark.asyncio
    async def test_process_message_should_blank_summary_when_it_fails(
        self, service: ChatService, mock_completion_client: MagicMock
    ) -> None:
        # Arrange
        mock_completion_client.summarize_question = AsyncMock(side_effect=RuntimeError("quota"))

        # Act
        response = await service.process_message(ChatRequest(user_id="u1", message="q"))

        # Assert
        assert response.resume_question == ""
        assert response.response == "You get twenty days."

    @pytest.mark.asyncio
    async def test_process_message_should_surface_degraded_answer(
        self, service: ChatService, orchestrator: MagicMock, query_result_factory
    ) -> None:
        orchestrator.answer = AsyncMock(
            return_value=Answer(
                question="q",
                answer="Sorry",
                query_result=query_result_factory([]),
                degraded=True,
                diagnostic="VectorStoreError: down",
            )
        )

        response = await service.process_message(ChatRequest(user_id="u1", message="q"))

        assert response.degraded is True
        assert response.sources == []
