"""
Document ORM model.

Uploaded document record with its storage location and the current signed
download URL.

Dependencies: sqlalchemy, ragdesk.boundary.db.base
System role: Persistence for external document metadata
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ragdesk.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Stored document metadata.

    Attributes:
        id: UUID primary key (auto-generated)
        storage_path: Object key in the document bucket
        signed_url: Last issued download URL
        signed_url_expires_at: Expiry of signed_url (UTC)
        original_name: Filename as uploaded
        file_size: Size in bytes
        content_type: MIME type
        alias: Display name
        description: Free-text description
        area: Business area the document belongs to
    """

    __tablename__ = "documents"

    storage_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    signed_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    signed_url_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    original_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    alias: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    area: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def to_dict(self) -> dict:
        """Plain-dict row used by the metadata store interface."""
        return {
            "id": str(self.id),
            "storage_path": self.storage_path,
            "signed_url": self.signed_url,
            "signed_url_expires_at": self.signed_url_expires_at,
            "original_name": self.original_name,
            "file_size": self.file_size,
            "content_type": self.content_type,
            "alias": self.alias,
            "description": self.description,
            "area": self.area,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
