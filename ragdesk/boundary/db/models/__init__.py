"""ORM models."""

from ragdesk.boundary.db.models.document_model import DocumentModel

__all__ = ["DocumentModel"]
