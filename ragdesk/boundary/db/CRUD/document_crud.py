"""
Document CRUD operations.

DocumentModel queries used by the metadata store: listing, signed URL
updates and name search.

Dependencies: sqlalchemy, ragdesk.boundary.db.models.document_model
System role: Document metadata persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragdesk.boundary.db.CRUD.base_crud import BaseCRUD
from ragdesk.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def update_signed_url(
        self,
        session: AsyncSession,
        id: UUID,
        signed_url: str,
        expires_at: datetime,
    ) -> DocumentModel | None:
        """
        Persist a freshly issued signed URL.

        Args:
            session: Async database session
            id: Document UUID
            signed_url: New download URL
            expires_at: URL expiry (UTC)

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            signed_url=signed_url,
            signed_url_expires_at=expires_at,
        )

    async def search_by_name(
        self,
        session: AsyncSession,
        query: str,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Case-insensitive substring search over original filenames.

        Args:
            session: Async database session
            query: Substring to look for
            limit: Maximum number of documents to return

        Returns:
            Sequence of matching DocumentModels ordered by name
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.original_name.icontains(query, autoescape=True))
            .order_by(DocumentModel.original_name)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()
