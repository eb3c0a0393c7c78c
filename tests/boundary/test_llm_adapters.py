"""
Test suite for the LLM adapters.

Tests message assembly and reply handling in GeminiChatClient and the
delegation of GoogleTextEmbedder to the LangChain embeddings model.

System role: Verification of the provider boundary
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from ragdesk.boundary.llm.chat_client import GeminiChatClient, _content_text
from ragdesk.boundary.llm.google_embedder import GoogleTextEmbedder
from ragdesk.core.exceptions import ProviderError
from ragdesk.core.retrieval.prompts import DEFAULT_SYSTEM_PROMPT


def chat_model(content) -> MagicMock:
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=SimpleNamespace(content=content))
    return model


class TestContentText:
    """Test suite for _content_text()."""

    def test_content_text_should_join_text_parts(self) -> None:
        content = [{"type": "text", "text": "Hello "}, {"type": "image"}, "world"]
        assert _content_text(content) == "Hello world"

    def test_content_text_should_pass_strings_through(self) -> None:
        assert _content_text("plain") == "plain"


class TestGeminiChatClient:
    """Test suite for GeminiChatClient."""

    @pytest.mark.asyncio
    async def test_complete_should_send_system_context_and_question(self) -> None:
        # Arrange
        model = chat_model("  Twenty days.  ")
        client = GeminiChatClient(model, chat_model("unused"))

        # Act
        answer = await client.complete("How many days?", "Document a.pdf (Page 1): 20 days")

        # Assert
        assert answer == "Twenty days."
        messages = model.ainvoke.await_args.args[0]
        assert [m.type for m in messages] == ["system", "system", "human"]
        assert messages[0].content == DEFAULT_SYSTEM_PROMPT
        assert messages[1].content == "CONTEXT:\nDocument a.pdf (Page 1): 20 days"
        assert messages[2].content == "How many days?"

    @pytest.mark.asyncio
    async def test_complete_should_use_custom_system_prompt(self) -> None:
        model = chat_model("ok")
        client = GeminiChatClient(model, chat_model("unused"))

        await client.complete("q", "ctx", system_prompt="Answer in French.")

        assert model.ainvoke.await_args.args[0][0].content == "Answer in French."

    @pytest.mark.asyncio
    async def test_complete_should_raise_provider_error_on_empty_reply(self) -> None:
        client = GeminiChatClient(chat_model("   "), chat_model("unused"))

        with pytest.raises(ProviderError) as exc_info:
            await client.complete("q", "ctx")

        assert exc_info.value.details["provider"] == "completion"

    @pytest.mark.asyncio
    async def test_summarize_question_should_keep_at_most_five_words(self) -> None:
        # Arrange
        summary = chat_model("Annual vacation days policy for new hires")
        client = GeminiChatClient(chat_model("unused"), summary)

        # Act
        result = await client.summarize_question("How many vacation days do new hires get?")

        # Assert
        assert result == "Annual vacation days policy for"
        prompt = summary.ainvoke.await_args.args[0][0].content
        assert "How many vacation days do new hires get?" in prompt

    @pytest.mark.asyncio
    async def test_ping_should_report_summary_model_failure(self) -> None:
        summary = MagicMock()
        summary.ainvoke = AsyncMock(side_effect=RuntimeError("quota"))
        client = GeminiChatClient(chat_model("unused"), summary)

        assert await client.ping() is False


class TestGoogleTextEmbedder:
    """Test suite for GoogleTextEmbedder."""

    @pytest.mark.asyncio
    async def test_embed_text_should_delegate_to_aembed_query(self) -> None:
        # Arrange
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(return_value=[0.1, 0.2, 0.3])
        embedder = GoogleTextEmbedder(embeddings)

        # Act
        vector = await embedder.embed_text("hello")

        # Assert
        assert vector == [0.1, 0.2, 0.3]
        embeddings.aembed_query.assert_awaited_once_with("hello")
