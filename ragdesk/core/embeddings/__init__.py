"""Embedding generation."""

from ragdesk.core.embeddings.generator import EmbeddingGenerator

__all__ = ["EmbeddingGenerator"]
