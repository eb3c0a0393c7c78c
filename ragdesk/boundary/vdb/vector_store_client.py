"""
S3 Vectors client wrapper.

Builds metadata filters, queries nearest neighbours and upserts vectors in
capped batches against an Amazon S3 Vectors index. boto3 calls are blocking,
so they run in worker threads with tenacity retries on client errors.

Dependencies: boto3, tenacity, ragdesk.configs, ragdesk.core.exceptions
System role: Vector store client for ingestion and retrieval
"""

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragdesk.configs.vector_store import VectorStoreSettings
from ragdesk.core.exceptions import EmptyBatchError, VectorStoreError
from ragdesk.core.interfaces import VectorSearcher, VectorUpserter
from ragdesk.core.throttle import RequestThrottle
from ragdesk.boundary.vdb.vector_schemas import VectorQuery
from ragdesk.models.document import DocumentRecord, QueryResult, SearchFilters
from ragdesk.models.vector import EmbeddingVector

load_dotenv()
logger = logging.getLogger(__name__)

FILTER_DIMENSIONS = ("area", "category", "source", "tags")


def build_metadata_filter(
    areas: list[str] | None = None,
    filters: SearchFilters | None = None,
) -> dict[str, Any]:
    """
    Build an S3 Vectors metadata filter.

    Each non-empty dimension becomes an `$in` predicate; several predicates
    are combined with `$and`. Empty or missing dimensions are never sent.

    Args:
        areas: Area values
        filters: Category, source and tag values (its `area` is used when
            `areas` is not given)

    Returns:
        dict: Filter document, empty when nothing constrains the search
    """
    if not areas and (filters is None or filters.is_empty()):
        return {}

    values: dict[str, list[str]] = {
        "area": list(areas or (filters.area if filters else [])),
        "category": list(filters.category) if filters else [],
        "source": list(filters.source) if filters else [],
        "tags": list(filters.tags) if filters else [],
    }

    predicates = [
        {key: {"$in": values[key]}}
        for key in FILTER_DIMENSIONS
        if values[key]
    ]
    if not predicates:
        return {}
    if len(predicates) == 1:
        return predicates[0]
    return {"$and": predicates}


def distance_to_score(distance: float, metric: str) -> float:
    """Convert an index distance to a similarity where higher is better."""
    if metric.lower() == "cosine":
        return 1.0 - distance
    return -distance


class VectorStoreClient(VectorSearcher, VectorUpserter):
    """
    S3 Vectors client for search and upsert.

    The configured index inside the vector bucket is the partition all
    searches and writes go to.
    """

    def __init__(
        self,
        settings: VectorStoreSettings,
        client: Any | None = None,
        throttle: RequestThrottle | None = None,
    ) -> None:
        """
        Initialize the S3 Vectors client.

        Args:
            settings: Vector store configuration
            client: Preconfigured boto3 `s3vectors` client (built if omitted)
            throttle: Gate spacing consecutive upsert batches
        """
        self.config = settings
        self.client = client or boto3.client("s3vectors", region_name=settings.aws_region)
        self.throttle = throttle or RequestThrottle(settings.upsert_interval_s)
        self._retrying = Retrying(
            retry=retry_if_exception_type((ClientError, BotoCoreError)),
            stop=stop_after_attempt(settings.max_retries),
            wait=wait_exponential_jitter(initial=0.5, max=10, jitter=1),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_call - Retry {retry_state.attempt_number}/"
                f"{settings.max_retries} after "
                f"{type(retry_state.outcome.exception()).__name__}"
            ),
            reraise=True,
        )

    @property
    def index_name(self) -> str:
        return self.config.index_name

    def _index_args(self) -> dict[str, str]:
        return {
            "vectorBucketName": self.config.vectors_bucket,
            "indexName": self.config.index_name,
        }

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        """Run a boto3 operation in a worker thread with retries."""
        method = getattr(self.client, operation)
        return await asyncio.to_thread(self._retrying.copy(), method, **kwargs)

    async def search(
        self,
        query_vector: list[float],
        areas: list[str] | None = None,
        top_k: int = 5,
        filters: SearchFilters | None = None,
    ) -> QueryResult:
        """
        Query the index for the nearest neighbours of a vector.

        Args:
            query_vector: Query embedding
            areas: Area filter values
            top_k: Maximum number of hits
            filters: Category, source and tag filters

        Returns:
            QueryResult: Hits sorted by score (highest first), at most top_k

        Raises:
            VectorStoreError: If the query fails after retries
        """
        query = VectorQuery(embedding=query_vector, top_k=top_k, areas=areas, filters=filters)
        metadata_filter = build_metadata_filter(query.areas, query.filters)

        request: dict[str, Any] = {
            **self._index_args(),
            "queryVector": {"float32": [float(v) for v in query.embedding]},
            "topK": query.top_k,
            "returnMetadata": True,
            "returnDistance": True,
        }
        if metadata_filter:
            request["filter"] = metadata_filter

        logger.info(
            f"{__name__}:search - Querying index={self.index_name}, "
            f"top_k={query.top_k}, filter={metadata_filter or 'none'}"
        )

        try:
            response = await self._call("query_vectors", **request)
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message="Failed to query vectors from S3 Vectors",
                operation="query",
                details={"error": str(e), "index": self.index_name},
            ) from e

        metric = response.get("distanceMetric") or self.config.distance_metric
        documents = [
            DocumentRecord.from_metadata(
                vector_id=match.get("key", ""),
                metadata=match.get("metadata"),
                score=distance_to_score(float(match.get("distance", 0.0)), metric),
            )
            for match in response.get("vectors", [])
        ]
        documents.sort(key=lambda doc: doc.score, reverse=True)
        documents = documents[: query.top_k]

        logger.info(f"{__name__}:search - Found {len(documents)} documents")
        return QueryResult.create(
            query="search_query",
            documents=documents,
            index_used=self.index_name,
            areas_used=[self.index_name],
            filters_applied=metadata_filter,
        )

    async def upsert(self, vectors: list[EmbeddingVector]) -> None:
        """
        Write vectors in batches of `upsert_batch_size`.

        Batches are sent one after another; a failed batch stops the upload
        and earlier batches stay written.

        Args:
            vectors: Vectors with deterministic ids and metadata

        Raises:
            EmptyBatchError: If vectors is empty
            VectorStoreError: If a batch fails after retries
        """
        if not vectors:
            raise EmptyBatchError("No vectors provided for upsert", field="vectors")

        batch_size = self.config.upsert_batch_size
        total_batches = (len(vectors) + batch_size - 1) // batch_size
        logger.info(
            f"{__name__}:upsert - Upserting {len(vectors)} vectors "
            f"in {total_batches} batches"
        )

        for batch_number, offset in enumerate(range(0, len(vectors), batch_size), start=1):
            batch = vectors[offset:offset + batch_size]
            entries = [
                {
                    "key": vector.id,
                    "data": {"float32": [float(v) for v in vector.values]},
                    "metadata": vector.metadata,
                }
                for vector in batch
            ]

            async with self.throttle:
                try:
                    await self._call("put_vectors", **self._index_args(), vectors=entries)
                except (ClientError, BotoCoreError) as e:
                    raise VectorStoreError(
                        message=f"Failed to upsert batch {batch_number}/{total_batches}",
                        operation="upsert",
                        details={
                            "error": str(e),
                            "batch": batch_number,
                            "vector_count": len(batch),
                        },
                    ) from e

            logger.debug(f"{__name__}:upsert - Batch {batch_number}/{total_batches} written")

        logger.info(f"{__name__}:upsert - Upserted {len(vectors)} vectors")

    async def ping(self) -> bool:
        """Return True iff the configured index exists and is reachable."""
        try:
            await asyncio.to_thread(self.client.get_index, **self._index_args())
            return True
        except Exception as e:
            logger.warning(f"{__name__}:ping - Vector index unavailable: {e}")
            return False
