"""CRUD operations for ORM models."""

from ragdesk.boundary.db.CRUD.base_crud import BaseCRUD
from ragdesk.boundary.db.CRUD.document_crud import DocumentCRUD

__all__ = ["BaseCRUD", "DocumentCRUD"]
