"""
Dependency injection container.

Lazily builds and caches the service graph from Settings. Tests construct
their own container or override attributes with fakes.

Dependencies: ragdesk.configs, ragdesk.core, ragdesk.boundary, ragdesk.application
System role: DI container for service injection
"""

from ragdesk.configs import Settings, get_settings


class ServiceContainer:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._metadata_cache = None
        self.clear()

    def clear(self) -> None:
        """Drop every cached instance except the metadata cache snapshot."""
        self._embedder = None
        self._embedding_generator = None
        self._vector_store = None
        self._chat_client = None
        self._ingestion_pipeline = None
        self._orchestrator = None
        self._chat_service = None
        self._session_factory = None
        self._metadata_store = None
        self._s3_client = None
        self._metadata_loader = None

    @property
    def embedder(self):
        if self._embedder is None:
            from ragdesk.boundary.llm.google_embedder import GoogleTextEmbedder
            self._embedder = GoogleTextEmbedder.from_settings(self.settings.llm)
        return self._embedder

    @property
    def embedding_generator(self):
        if self._embedding_generator is None:
            from ragdesk.core.embeddings.generator import EmbeddingGenerator
            from ragdesk.core.text.chunker import TextChunker
            from ragdesk.core.throttle import RequestThrottle

            pipeline = self.settings.pipeline
            self._embedding_generator = EmbeddingGenerator(
                embedder=self.embedder,
                chunker=TextChunker(
                    max_chunk_size=pipeline.chunk_size,
                    overlap_size=pipeline.chunk_overlap,
                    boundary_window=pipeline.boundary_window,
                    align_window=pipeline.align_window,
                ),
                throttle=RequestThrottle(pipeline.embedding_interval_s),
            )
        return self._embedding_generator

    @property
    def vector_store(self):
        if self._vector_store is None:
            from ragdesk.boundary.vdb.vector_store_client import VectorStoreClient
            self._vector_store = VectorStoreClient(self.settings.vector_store)
        return self._vector_store

    @property
    def chat_client(self):
        if self._chat_client is None:
            from ragdesk.boundary.llm.chat_client import GeminiChatClient
            self._chat_client = GeminiChatClient.from_settings(self.settings.llm)
        return self._chat_client

    @property
    def ingestion_pipeline(self):
        if self._ingestion_pipeline is None:
            from ragdesk.core.ingestion.pipeline import IngestionPipeline
            self._ingestion_pipeline = IngestionPipeline(
                embedding_generator=self.embedding_generator,
                vector_store=self.vector_store,
                max_chunk_size=self.settings.pipeline.chunk_size,
                overlap_size=self.settings.pipeline.chunk_overlap,
            )
        return self._ingestion_pipeline

    @property
    def orchestrator(self):
        if self._orchestrator is None:
            from ragdesk.core.retrieval.orchestrator import RetrievalOrchestrator
            self._orchestrator = RetrievalOrchestrator(
                embedding_generator=self.embedding_generator,
                vector_store=self.vector_store,
                completion_client=self.chat_client,
            )
        return self._orchestrator

    @property
    def metadata_cache(self):
        if self._metadata_cache is None:
            from ragdesk.application.services.metadata_cache import ExternalMetadataCache
            self._metadata_cache = ExternalMetadataCache(
                max_age_ms=self.settings.cache.max_age_ms,
            )
        return self._metadata_cache

    @property
    def chat_service(self):
        if self._chat_service is None:
            from ragdesk.application.services.chat_service import ChatService
            self._chat_service = ChatService(
                orchestrator=self.orchestrator,
                completion_client=self.chat_client,
                cache=self.metadata_cache,
                top_k=self.settings.vector_store.top_k,
            )
        return self._chat_service

    @property
    def session_factory(self):
        if self._session_factory is None:
            from ragdesk.boundary.db.connection import (
                get_async_engine,
                get_async_session_factory,
            )
            engine = get_async_engine(self.settings.database)
            self._session_factory = get_async_session_factory(engine)
        return self._session_factory

    @property
    def metadata_store(self):
        if self._metadata_store is None:
            from ragdesk.boundary.db.metadata_store import DocumentMetadataStore
            self._metadata_store = DocumentMetadataStore(self.session_factory)
        return self._metadata_store

    @property
    def s3_client(self):
        if self._s3_client is None:
            from ragdesk.boundary.aws.s3_client import S3DocumentClient
            self._s3_client = S3DocumentClient(
                bucket=self.settings.s3_documents.bucket,
                region=self.settings.s3_documents.region,
            )
        return self._s3_client

    @property
    def metadata_loader(self):
        if self._metadata_loader is None:
            from ragdesk.application.services.metadata_loader import DocumentMetadataLoader
            s3_settings = self.settings.s3_documents
            self._metadata_loader = DocumentMetadataLoader(
                store=self.metadata_store,
                signer=self.s3_client,
                signed_url_expiry=s3_settings.signed_url_expiry,
                refresh_threshold_hours=s3_settings.refresh_threshold_hours,
            )
        return self._metadata_loader


_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the process-wide service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container
