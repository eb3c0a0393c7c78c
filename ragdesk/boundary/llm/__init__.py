"""Language model adapters: Google embeddings and Gemini chat."""

from ragdesk.boundary.llm.chat_client import GeminiChatClient
from ragdesk.boundary.llm.embeddings_wrapper import FixedDimensionEmbeddings
from ragdesk.boundary.llm.google_embedder import GoogleTextEmbedder

__all__ = ["FixedDimensionEmbeddings", "GeminiChatClient", "GoogleTextEmbedder"]
