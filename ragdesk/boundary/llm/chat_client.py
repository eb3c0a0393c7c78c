"""
Gemini completion client.

Implements CompletionClient with LangChain's ChatGoogleGenerativeAI. Answers
are generated from a system prompt, the retrieved context and the question;
summaries use a smaller model capped to a few tokens.

Dependencies: langchain_google_genai, langchain_core, tenacity
System role: Answer synthesis and question summaries
"""

import logging

from dotenv import load_dotenv
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragdesk.configs.llm import LLMSettings
from ragdesk.core.exceptions import ProviderError
from ragdesk.core.interfaces import CompletionClient
from ragdesk.core.retrieval.prompts import (
    ANSWER_PROMPT,
    DEFAULT_SYSTEM_PROMPT,
    SUMMARY_PROMPT,
)

load_dotenv()
logger = logging.getLogger(__name__)


def _content_text(content) -> str:
    """Flatten a message content (string or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content or "")


class GeminiChatClient(CompletionClient):
    """
    Completion client over two chat models.

    Usage:
        client = GeminiChatClient.from_settings(get_settings().llm)
        answer = await client.complete(question, context)
    """

    def __init__(self, chat_model: BaseChatModel, summary_model: BaseChatModel) -> None:
        """
        Args:
            chat_model: Model used for grounded answers
            summary_model: Model used for short question summaries
        """
        self._chat_model = chat_model
        self._summary_model = summary_model

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "GeminiChatClient":
        kwargs = {}
        if settings.google_api_key:
            kwargs["google_api_key"] = settings.google_api_key

        chat_model = ChatGoogleGenerativeAI(
            model=settings.chat_model,
            temperature=settings.temperature,
            **kwargs,
        )
        summary_model = ChatGoogleGenerativeAI(
            model=settings.summary_model,
            temperature=settings.temperature,
            max_output_tokens=settings.summary_max_tokens,
            **kwargs,
        )
        logger.info(
            f"{__name__}:from_settings - chat_model={settings.chat_model}, "
            f"summary_model={settings.summary_model}"
        )
        return cls(chat_model, summary_model)

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_invoke - Retry {retry_state.attempt_number}/3"
        ),
        reraise=True,
    )
    async def _invoke(self, model: BaseChatModel, messages: list) -> str:
        response = await model.ainvoke(messages)
        return _content_text(response.content).strip()

    async def complete(
        self,
        question: str,
        context: str,
        system_prompt: str | None = None,
    ) -> str:
        """
        Generate an answer grounded in the given context.

        Args:
            question: User question
            context: Retrieved fragments, already formatted
            system_prompt: Override for the default system prompt

        Returns:
            str: Trimmed answer text

        Raises:
            ProviderError: When the model fails or replies with no text
        """
        messages = ANSWER_PROMPT.format_messages(
            system_prompt=system_prompt or DEFAULT_SYSTEM_PROMPT,
            context=context,
            question=question,
        )
        logger.info(
            f"{__name__}:complete - Generating answer for question of "
            f"{len(question)} chars with {len(context)} chars of context"
        )

        try:
            content = await self._invoke(self._chat_model, messages)
        except Exception as e:
            raise ProviderError(
                f"Failed to generate answer: {e}", provider="completion"
            ) from e

        if not content:
            raise ProviderError("Model returned an empty answer", provider="completion")
        return content

    async def summarize_question(self, question: str) -> str:
        """
        Paraphrase a question in at most five words.

        Raises:
            ProviderError: When the model fails or replies with no text
        """
        messages = SUMMARY_PROMPT.format_messages(question=question)
        try:
            content = await self._invoke(self._summary_model, messages)
        except Exception as e:
            raise ProviderError(
                f"Failed to summarize question: {e}", provider="completion"
            ) from e

        if not content:
            raise ProviderError("Model returned an empty summary", provider="completion")
        return " ".join(content.split()[:5])

    async def ping(self) -> bool:
        """Return True when the summary model answers a trivial prompt."""
        try:
            await self._summary_model.ainvoke("ping")
            return True
        except Exception as e:
            logger.warning(f"{__name__}:ping - Chat provider unavailable: {e}")
            return False
