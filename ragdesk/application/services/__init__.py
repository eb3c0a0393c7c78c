"""Application services."""

from ragdesk.application.services.chat_service import ChatService
from ragdesk.application.services.metadata_cache import ExternalMetadataCache
from ragdesk.application.services.metadata_loader import DocumentMetadataLoader

__all__ = ["ChatService", "DocumentMetadataLoader", "ExternalMetadataCache"]
