"""
Test suite for DocumentMetadataStore.

Runs the store against an in-memory SQLite database to verify reads,
signed URL persistence and error mapping.

System role: Verification of the metadata persistence boundary
"""

import uuid
from datetime import datetime, timezone

import pytest

from ragdesk.boundary.db.metadata_store import DocumentMetadataStore
from ragdesk.boundary.db.models import DocumentModel
from ragdesk.core.exceptions import MetadataStoreError


@pytest.fixture
async def seeded(session_factory) -> list[str]:
    """Insert two documents and return their ids."""
    async with session_factory() as session:
        docs = [
            DocumentModel(
                storage_path="uploads/handbook.pdf",
                signed_url="https://signed.example/handbook",
                original_name="Employee Handbook.pdf",
                file_size=2048,
                content_type="application/pdf",
                area="hr",
            ),
            DocumentModel(
                storage_path="uploads/budget.xlsx",
                original_name="budget.xlsx",
                file_size=512,
            ),
        ]
        session.add_all(docs)
        await session.commit()
        return [str(doc.id) for doc in docs]


@pytest.fixture
def store(session_factory) -> DocumentMetadataStore:
    """Provide store bound to the in-memory database."""
    return DocumentMetadataStore(session_factory)


class TestReads:
    """Test suite for fetch_all(), fetch_by_id() and search_by_name()."""

    @pytest.mark.asyncio
    async def test_fetch_all_should_return_every_row_as_dict(
        self, store: DocumentMetadataStore, seeded: list[str]
    ) -> None:
        # Act
        rows = await store.fetch_all()

        # Assert
        assert {row["id"] for row in rows} == set(seeded)
        handbook = next(row for row in rows if row["original_name"] == "Employee Handbook.pdf")
        assert handbook["storage_path"] == "uploads/handbook.pdf"
        assert handbook["file_size"] == 2048
        assert handbook["area"] == "hr"

    @pytest.mark.asyncio
    async def test_fetch_by_id_should_return_matching_row(
        self, store: DocumentMetadataStore, seeded: list[str]
    ) -> None:
        row = await store.fetch_by_id(seeded[1])
        assert row is not None
        assert row["original_name"] == "budget.xlsx"
        assert row["signed_url"] is None

    @pytest.mark.asyncio
    async def test_fetch_by_id_should_return_none_for_unknown_or_invalid_id(
        self, store: DocumentMetadataStore, seeded: list[str]
    ) -> None:
        assert await store.fetch_by_id(str(uuid.uuid4())) is None
        assert await store.fetch_by_id("not-a-uuid") is None

    @pytest.mark.asyncio
    async def test_search_by_name_should_match_case_insensitively(
        self, store: DocumentMetadataStore, seeded: list[str]
    ) -> None:
        rows = await store.search_by_name("HANDBOOK")
        assert [row["original_name"] for row in rows] == ["Employee Handbook.pdf"]

    @pytest.mark.asyncio
    async def test_search_by_name_should_match_wildcard_characters_literally(
        self, store: DocumentMetadataStore, session_factory
    ) -> None:
        # Arrange
        async with session_factory() as session:
            session.add_all([
                DocumentModel(original_name="growth_100%.pdf"),
                DocumentModel(original_name="growthX1000.pdf"),
            ])
            await session.commit()

        # Act
        underscore = await store.search_by_name("h_1")
        percent = await store.search_by_name("0%.")

        # Assert
        assert [row["original_name"] for row in underscore] == ["growth_100%.pdf"]
        assert [row["original_name"] for row in percent] == ["growth_100%.pdf"]


class TestSaveSignedUrl:
    """Test suite for save_signed_url()."""

    @pytest.mark.asyncio
    async def test_save_signed_url_should_persist_url_and_expiry(
        self, store: DocumentMetadataStore, seeded: list[str]
    ) -> None:
        # Arrange
        expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)

        # Act
        await store.save_signed_url(seeded[1], "https://signed.example/budget", expires_at)

        # Assert
        row = await store.fetch_by_id(seeded[1])
        assert row["signed_url"] == "https://signed.example/budget"
        assert row["signed_url_expires_at"].replace(tzinfo=None) == datetime(2030, 1, 1)

    @pytest.mark.asyncio
    async def test_save_signed_url_should_raise_for_unknown_document(
        self, store: DocumentMetadataStore, seeded: list[str]
    ) -> None:
        with pytest.raises(MetadataStoreError, match="Document not found"):
            await store.save_signed_url(
                str(uuid.uuid4()), "https://x", datetime.now(timezone.utc)
            )

    @pytest.mark.asyncio
    async def test_save_signed_url_should_raise_for_invalid_id(
        self, store: DocumentMetadataStore
    ) -> None:
        with pytest.raises(MetadataStoreError, match="Invalid document id"):
            await store.save_signed_url("42", "https://x", datetime.now(timezone.utc))


class TestPing:
    """Test suite for DocumentMetadataStore.ping()."""

    @pytest.mark.asyncio
    async def test_ping_should_return_true_for_live_database(
        self, store: DocumentMetadataStore
    ) -> None:
        assert await store.ping() is True
