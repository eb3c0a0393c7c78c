"""
Chat and answer domain models.

Answer is the orchestrator output; ChatRequest/ChatResponse are the
query contracts returned to the transport layer.

Dependencies: pydantic
System role: Retrieval and chat contracts
"""

from pydantic import BaseModel, Field

from ragdesk.models.document import QueryResult


class Answer(BaseModel):
    """
    Answer produced by the retrieval orchestrator.

    degraded is True only when an internal failure replaced the answer;
    "no relevant documents" is a normal, non-degraded outcome.
    """

    question: str
    answer: str
    query_result: QueryResult
    context_used: str = ""
    total_documents_found: int = 0
    degraded: bool = False
    diagnostic: str | None = None


class HealthStatus(BaseModel):
    """Liveness of the retrieval dependencies."""

    embeddings: bool
    vector_store: bool
    overall: bool


class ChatRequest(BaseModel):
    """Question with optional metadata filters."""

    user_id: str
    message: str
    area: list[str] = Field(default_factory=list)
    category: list[str] = Field(default_factory=list)
    source: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class Source(BaseModel):
    """Supporting fragment returned alongside an answer."""

    page: str
    matching_text: str
    source: str
    document_id: str
    score: str
    signed_url: str = ""


class ChatResponse(BaseModel):
    """Answer, timestamp, supporting sources and a terse question summary."""

    response: str
    timestamp: str
    sources: list[Source] = Field(default_factory=list)
    resume_question: str = ""
    degraded: bool = False
