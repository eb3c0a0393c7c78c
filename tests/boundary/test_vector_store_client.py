"""
Test suite for the S3 Vectors client.

Tests metadata filter construction, search request and response handling,
batched upserts and the index probe against a mocked boto3 client.

System role: Verification of the vector store boundary
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from ragdesk.boundary.vdb.vector_store_client import (
    VectorStoreClient,
    build_metadata_filter,
    distance_to_score,
)
from ragdesk.configs.vector_store import VectorStoreSettings
from ragdesk.core.exceptions import EmptyBatchError, VectorStoreError
from ragdesk.models.document import SearchFilters
from ragdesk.models.vector import EmbeddingVector


def client_error(operation: str = "QueryVectors") -> ClientError:
    return ClientError(
        {"Error": {"Code": "ServiceUnavailableException", "Message": "try later"}},
        operation,
    )


@pytest.fixture
def settings() -> VectorStoreSettings:
    """Provide settings with a single attempt so failures do not back off."""
    return VectorStoreSettings(
        vectors_bucket="test-vectors",
        index_name="documents",
        max_retries=1,
        upsert_batch_size=100,
    )


@pytest.fixture
def boto_client() -> MagicMock:
    """Provide mocked s3vectors client."""
    client = MagicMock()
    client.query_vectors.return_value = {"vectors": [], "distanceMetric": "cosine"}
    client.put_vectors.return_value = {}
    client.get_index.return_value = {"index": {"indexName": "documents"}}
    return client


@pytest.fixture
def store(settings, boto_client, no_wait_throttle) -> VectorStoreClient:
    """Provide client wired to the mocked boto3 client."""
    return VectorStoreClient(settings, client=boto_client, throttle=no_wait_throttle)


def make_vectors(count: int) -> list[EmbeddingVector]:
    return [
        EmbeddingVector(id=f"doc_chunk_{i}", values=[0.1, 0.2], metadata={"chunkIndex": i})
        for i in range(count)
    ]


class TestBuildMetadataFilter:
    """Test suite for build_metadata_filter()."""

    def test_build_metadata_filter_should_return_empty_without_constraints(self) -> None:
        assert build_metadata_filter() == {}
        assert build_metadata_filter([], SearchFilters()) == {}

    def test_build_metadata_filter_should_return_single_predicate_unwrapped(self) -> None:
        assert build_metadata_filter(["legal"]) == {"area": {"$in": ["legal"]}}

    def test_build_metadata_filter_should_combine_dimensions_with_and(self) -> None:
        # Arrange
        filters = SearchFilters(category=["policy"], tags=["hr", "2024"])

        # Act
        result = build_metadata_filter(["legal", "ops"], filters)

        # Assert
        assert result == {
            "$and": [
                {"area": {"$in": ["legal", "ops"]}},
                {"category": {"$in": ["policy"]}},
                {"tags": {"$in": ["hr", "2024"]}},
            ]
        }

    def test_build_metadata_filter_should_fall_back_to_filter_area(self) -> None:
        result = build_metadata_filter(None, SearchFilters(area=["finance"]))
        assert result == {"area": {"$in": ["finance"]}}

    def test_distance_to_score_should_invert_by_metric(self) -> None:
        assert distance_to_score(0.25, "cosine") == pytest.approx(0.75)
        assert distance_to_score(2.0, "euclidean") == pytest.approx(-2.0)


class TestSearch:
    """Test suite for VectorStoreClient.search()."""

    @pytest.mark.asyncio
    async def test_search_should_send_query_without_filter_when_unconstrained(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        # Act
        await store.search([1, 2, 3], top_k=3)

        # Assert
        request = boto_client.query_vectors.call_args.kwargs
        assert request["vectorBucketName"] == "test-vectors"
        assert request["indexName"] == "documents"
        assert request["queryVector"] == {"float32": [1.0, 2.0, 3.0]}
        assert request["topK"] == 3
        assert request["returnMetadata"] is True
        assert request["returnDistance"] is True
        assert "filter" not in request

    @pytest.mark.asyncio
    async def test_search_should_send_filter_when_constrained(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        # Act
        result = await store.search([0.5], areas=["legal"])

        # Assert
        assert boto_client.query_vectors.call_args.kwargs["filter"] == {"area": {"$in": ["legal"]}}
        assert result.filters_applied == {"area": {"$in": ["legal"]}}

    @pytest.mark.asyncio
    async def test_search_should_map_and_rank_matches(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        # Arrange
        boto_client.query_vectors.return_value = {
            "distanceMetric": "cosine",
            "vectors": [
                {"key": "b_chunk_0", "distance": 0.4, "metadata": {"text": "far", "filename": "b.pdf", "page": 2}},
                {"key": "a_chunk_3", "distance": 0.1, "metadata": {"text": "near", "filename": "a.pdf", "page": 5}},
                {"key": "c_chunk_1", "distance": 0.2, "metadata": None},
            ],
        }

        # Act
        result = await store.search([0.1, 0.2], top_k=2)

        # Assert
        assert [doc.id for doc in result.documents] == ["a_chunk_3", "c_chunk_1"]
        assert result.total_results == 2
        assert result.documents[0].score == pytest.approx(0.9)
        assert result.documents[0].source == "a.pdf"
        assert result.documents[0].page == "5"
        assert result.documents[1].text == "Not available"
        assert result.documents[1].source == "Unknown"
        assert result.index_used == "documents"
        assert result.areas_used == ["documents"]

    @pytest.mark.asyncio
    async def test_search_should_use_configured_metric_when_response_omits_it(
        self, settings, boto_client: MagicMock, no_wait_throttle
    ) -> None:
        # Arrange
        settings.distance_metric = "euclidean"
        store = VectorStoreClient(settings, client=boto_client, throttle=no_wait_throttle)
        boto_client.query_vectors.return_value = {
            "vectors": [
                {"key": "x_chunk_0", "distance": 3.0, "metadata": {}},
                {"key": "y_chunk_0", "distance": 1.0, "metadata": {}},
            ]
        }

        # Act
        result = await store.search([0.1])

        # Assert
        assert [doc.id for doc in result.documents] == ["y_chunk_0", "x_chunk_0"]
        assert result.documents[0].score == pytest.approx(-1.0)

    @pytest.mark.asyncio
    async def test_search_should_raise_vector_store_error_on_client_error(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        # Arrange
        boto_client.query_vectors.side_effect = client_error()

        # Act & Assert
        with pytest.raises(VectorStoreError) as exc_info:
            await store.search([0.1])

        assert exc_info.value.details["operation"] == "query"
        assert isinstance(exc_info.value.__cause__, ClientError)


class TestUpsert:
    """Test suite for VectorStoreClient.upsert()."""

    @pytest.mark.asyncio
    async def test_upsert_should_reject_empty_batch(self, store: VectorStoreClient) -> None:
        with pytest.raises(EmptyBatchError):
            await store.upsert([])

    @pytest.mark.asyncio
    async def test_upsert_should_split_into_capped_batches(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        # Act
        await store.upsert(make_vectors(250))

        # Assert
        sizes = [len(call.kwargs["vectors"]) for call in boto_client.put_vectors.call_args_list]
        assert sizes == [100, 100, 50]
        first_entry = boto_client.put_vectors.call_args_list[0].kwargs["vectors"][0]
        assert first_entry == {
            "key": "doc_chunk_0",
            "data": {"float32": [0.1, 0.2]},
            "metadata": {"chunkIndex": 0},
        }
        last_batch = boto_client.put_vectors.call_args_list[2].kwargs["vectors"]
        assert last_batch[-1]["key"] == "doc_chunk_249"

    @pytest.mark.asyncio
    async def test_upsert_should_stop_at_failing_batch(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        # Arrange
        boto_client.put_vectors.side_effect = [{}, client_error("PutVectors"), {}]

        # Act & Assert
        with pytest.raises(VectorStoreError) as exc_info:
            await store.upsert(make_vectors(250))

        assert exc_info.value.details["batch"] == 2
        assert exc_info.value.details["vector_count"] == 100
        assert boto_client.put_vectors.call_count == 2


class TestPing:
    """Test suite for VectorStoreClient.ping()."""

    @pytest.mark.asyncio
    async def test_ping_should_return_true_when_index_exists(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        assert await store.ping() is True
        boto_client.get_index.assert_called_once_with(
            vectorBucketName="test-vectors", indexName="documents"
        )

    @pytest.mark.asyncio
    async def test_ping_should_return_false_on_error(
        self, store: VectorStoreClient, boto_client: MagicMock
    ) -> None:
        boto_client.get_index.side_effect = client_error("GetIndex")
        assert await store.ping() is False
