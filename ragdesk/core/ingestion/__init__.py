"""Document ingestion."""

from ragdesk.core.ingestion.pipeline import IngestionPipeline

__all__ = ["IngestionPipeline"]
