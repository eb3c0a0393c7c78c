"""
Startup tasks.

Warms the external metadata cache before the first request.

Dependencies: ragdesk.dependencies
System role: Application bootstrap
"""

import logging
from typing import TYPE_CHECKING

from ragdesk.observability.logger import configure_logging

if TYPE_CHECKING:
    from ragdesk.dependencies import ServiceContainer

logger = logging.getLogger(__name__)


async def run_on_startup(container: "ServiceContainer") -> None:
    """
    Configure logging and load document metadata into the cache.

    Never raises; on failure the cache is left empty so the application can
    still serve questions.
    """
    settings = container.settings
    configure_logging(settings.log_level)
    logger.info(
        f"{__name__}:run_on_startup - Starting {settings.app_name} ({settings.environment})"
    )

    cache = container.metadata_cache
    try:
        await cache.load(container.metadata_loader)
    except Exception as e:
        logger.exception(f"{__name__}:run_on_startup - Failed to load documents cache: {e}")
        cache.set_documents([])
        return

    documents = cache.list_documents()
    stats = cache.stats()
    logger.info(
        f"{__name__}:run_on_startup - Cached {len(documents)} documents, "
        f"first ids: {[doc.id for doc in documents[:5]]}"
    )
    logger.info(
        f"{__name__}:run_on_startup - Cache stats: {stats.total_documents} docs, "
        f"{stats.total_size / 1024 / 1024:.2f} MB total, "
        f"{stats.documents_without_signed_urls} without signed URL"
    )
