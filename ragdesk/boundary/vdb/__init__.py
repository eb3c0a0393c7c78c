"""Vector database boundary: Amazon S3 Vectors client and schemas."""

from ragdesk.boundary.vdb.vector_schemas import VectorMetadata, VectorQuery
from ragdesk.boundary.vdb.vector_store_client import (
    VectorStoreClient,
    build_metadata_filter,
    distance_to_score,
)

__all__ = [
    "VectorMetadata",
    "VectorQuery",
    "VectorStoreClient",
    "build_metadata_filter",
    "distance_to_score",
]
