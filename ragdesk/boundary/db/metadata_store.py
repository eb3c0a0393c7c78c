"""
Document metadata store.

Implements MetadataStore over an async session factory and DocumentCRUD.
Each operation runs in its own session; writes commit before returning.

Dependencies: sqlalchemy, ragdesk.boundary.db.CRUD
System role: Persistent source of external document records
"""

import logging
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ragdesk.boundary.db.CRUD.document_crud import DocumentCRUD
from ragdesk.boundary.db.models.document_model import DocumentModel
from ragdesk.core.exceptions import MetadataStoreError
from ragdesk.core.interfaces import MetadataStore

logger = logging.getLogger(__name__)


def _parse_id(document_id: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(document_id))
    except ValueError:
        return None


class DocumentMetadataStore(MetadataStore):
    """Async SQLAlchemy store for document records."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        crud: DocumentCRUD | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._crud = crud or DocumentCRUD()

    async def fetch_all(self) -> list[dict[str, Any]]:
        """
        Read every document record.

        Raises:
            MetadataStoreError: If the query fails
        """
        try:
            async with self._session_factory() as session:
                rows = await self._crud.get_all(session, order_by=DocumentModel.created_at)
                return [row.to_dict() for row in rows]
        except SQLAlchemyError as e:
            raise MetadataStoreError(
                "Failed to fetch documents",
                details={"error": str(e)},
            ) from e

    async def fetch_by_id(self, document_id: str) -> dict[str, Any] | None:
        """
        Read one document record.

        Returns:
            dict | None: Row data, None when missing or the id is not a UUID

        Raises:
            MetadataStoreError: If the query fails
        """
        doc_uuid = _parse_id(document_id)
        if doc_uuid is None:
            logger.warning(f"{__name__}:fetch_by_id - Invalid document id: {document_id}")
            return None

        try:
            async with self._session_factory() as session:
                row = await self._crud.get_by_id(session, doc_uuid)
                return row.to_dict() if row else None
        except SQLAlchemyError as e:
            raise MetadataStoreError(
                "Failed to fetch document",
                details={"document_id": document_id, "error": str(e)},
            ) from e

    async def search_by_name(self, query: str) -> list[dict[str, Any]]:
        """Case-insensitive filename search."""
        try:
            async with self._session_factory() as session:
                rows = await self._crud.search_by_name(session, query)
                return [row.to_dict() for row in rows]
        except SQLAlchemyError as e:
            raise MetadataStoreError(
                "Failed to search documents",
                details={"query": query, "error": str(e)},
            ) from e

    async def save_signed_url(
        self,
        document_id: str,
        signed_url: str,
        expires_at: datetime,
    ) -> None:
        """
        Persist a regenerated signed URL.

        Raises:
            MetadataStoreError: If the update fails or the document is unknown
        """
        doc_uuid = _parse_id(document_id)
        if doc_uuid is None:
            raise MetadataStoreError(
                "Invalid document id",
                details={"document_id": document_id},
            )

        try:
            async with self._session_factory() as session:
                updated = await self._crud.update_signed_url(
                    session, doc_uuid, signed_url, expires_at
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise MetadataStoreError(
                "Failed to update signed URL",
                details={"document_id": document_id, "error": str(e)},
            ) from e

        if updated is None:
            raise MetadataStoreError(
                "Document not found",
                details={"document_id": document_id},
            )

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"{__name__}:ping - Metadata store unavailable: {e}")
            return False
