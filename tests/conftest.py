"""
Shared test fixtures and configuration for entire test suite.

Provides: fake providers, in-memory async database, sample documents
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ragdesk.core.interfaces import TextEmbedder
from ragdesk.core.throttle import RequestThrottle
from ragdesk.models.document import DocumentRecord, QueryResult


class FakeEmbedder(TextEmbedder):
    """Deterministic embedder recording every call."""

    def __init__(self, dimension: int = 4, fail_on: str | None = None) -> None:
        self.dimension = dimension
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def embed_text(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on is not None and self.fail_on in text:
            raise RuntimeError("provider unavailable")
        return [float(len(text))] + [0.1] * (self.dimension - 1)


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    """Provide deterministic embedder."""
    return FakeEmbedder()


@pytest.fixture
def no_wait_throttle() -> RequestThrottle:
    """Provide throttle without spacing so tests do not sleep."""
    return RequestThrottle(min_interval_s=0)


def make_document(
    id: str = "doc-1_chunk_0",
    score: float = 0.9,
    source: str = "manual.pdf",
    page: str = "1",
    text: str = "Fragment text",
    metadata: dict | None = None,
) -> DocumentRecord:
    """Build a search hit with sensible defaults."""
    return DocumentRecord(
        id=id,
        text=text,
        source=source,
        page=page,
        score=score,
        metadata=metadata if metadata is not None else {"documentId": id.split("_chunk_")[0]},
    )


def make_query_result(documents: list[DocumentRecord]) -> QueryResult:
    return QueryResult.create("search_query", documents, "documents", ["documents"], {})


@pytest.fixture
def document_factory():
    """Provide builder for search hits."""
    return make_document


@pytest.fixture
def query_result_factory():
    """Provide builder for query results."""
    return make_query_result


@pytest.fixture
def failing_embedder() -> FakeEmbedder:
    """Provide embedder that fails on texts containing "boom"."""
    return FakeEmbedder(fail_on="boom")


@pytest.fixture
def mock_vector_store() -> MagicMock:
    """Provide vector store mock with async search, upsert and ping."""
    store = MagicMock()
    store.search = AsyncMock(return_value=make_query_result([]))
    store.upsert = AsyncMock(return_value=None)
    store.ping = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_completion_client() -> MagicMock:
    """Provide completion client mock."""
    client = MagicMock()
    client.complete = AsyncMock(return_value="  Grounded answer.  ")
    client.summarize_question = AsyncMock(return_value="Vacation policy question")
    return client


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a fresh schema, disposed after the test
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from ragdesk.boundary.db.base import Base
    from ragdesk.boundary.db.models import DocumentModel  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
