"""Question answering over the vector index."""

from ragdesk.core.retrieval.orchestrator import RetrievalOrchestrator, build_context

__all__ = ["RetrievalOrchestrator", "build_context"]
