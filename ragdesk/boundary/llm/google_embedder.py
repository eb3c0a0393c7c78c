"""
Google embedding adapter.

Implements TextEmbedder on top of FixedDimensionEmbeddings, retrying
transient provider failures with exponential jitter.

Dependencies: langchain_google_genai, tenacity
System role: Concrete embedding provider for EmbeddingGenerator
"""

import logging

from langchain_core.embeddings import Embeddings
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragdesk.configs.llm import LLMSettings
from ragdesk.core.interfaces import TextEmbedder
from ragdesk.boundary.llm.embeddings_wrapper import FixedDimensionEmbeddings

logger = logging.getLogger(__name__)


class GoogleTextEmbedder(TextEmbedder):
    """TextEmbedder backed by a LangChain embeddings model."""

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "GoogleTextEmbedder":
        """Build the adapter with a FixedDimensionEmbeddings model from settings."""
        kwargs = {}
        if settings.google_api_key:
            kwargs["google_api_key"] = settings.google_api_key
        return cls(
            FixedDimensionEmbeddings(
                model=settings.embedding_model,
                output_dimensionality=settings.embedding_dimension,
                **kwargs,
            )
        )

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=0.5, max=8, jitter=1),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:embed_text - Retry {retry_state.attempt_number}/3 "
            f"after {type(retry_state.outcome.exception()).__name__}"
        ),
        reraise=True,
    )
    async def embed_text(self, text: str) -> list[float]:
        return await self._embeddings.aembed_query(text)
