"""
Database boundary.

Async SQLAlchemy models, CRUD and the document metadata store.
"""

from ragdesk.boundary.db.base import Base, TimestampMixin, UUIDMixin
from ragdesk.boundary.db.connection import get_async_engine, get_async_session_factory
from ragdesk.boundary.db.metadata_store import DocumentMetadataStore

__all__ = [
    "Base",
    "DocumentMetadataStore",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_engine",
    "get_async_session_factory",
]
