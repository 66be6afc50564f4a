"""
Dependency injection container.

Lazily built, process-wide service instances and the FastAPI dependency
functions that hand them to routers.

Dependencies: doc_assistant.configs, doc_assistant.application, doc_assistant.boundary
System role: DI container for service injection
"""

from fastapi import Depends

from doc_assistant.application.services import ChatService, IndexingService
from doc_assistant.boundary.chunk_store import ChunkStore
from doc_assistant.configs import Settings, get_settings
from doc_assistant.core.retrieval import Retriever


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._chunk_store = None
        self._content_source = None
        self._completion_client = None
        self._chunker = None
        self._retriever = None
        self._indexing_service = None
        self._chat_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def chunk_store(self) -> ChunkStore:
        """Get cached chunk store (not loaded; the lifespan replays the log)."""
        if self._chunk_store is None:
            self._chunk_store = ChunkStore(self.settings.chunk_store.log_path)
        return self._chunk_store

    @property
    def content_source(self):
        """Get cached GitHub content source."""
        if self._content_source is None:
            from doc_assistant.boundary.content_source import GitHubContentSource
            self._content_source = GitHubContentSource.from_settings(self.settings.github)
        return self._content_source

    @property
    def completion_client(self):
        """Get cached Ollama client."""
        if self._completion_client is None:
            from doc_assistant.boundary.llm import OllamaCompletionClient
            self._completion_client = OllamaCompletionClient.from_settings(self.settings.completion)
        return self._completion_client

    @property
    def chunker(self):
        if self._chunker is None:
            from doc_assistant.core.chunking import Chunker
            self._chunker = Chunker.from_settings(self.settings.chunking)
        return self._chunker

    @property
    def retriever(self) -> Retriever:
        """Get cached retriever."""
        if self._retriever is None:
            self._retriever = Retriever.from_settings(self.chunk_store, self.settings.retrieval)
        return self._retriever

    @property
    def indexing_service(self) -> IndexingService:
        """Get cached indexing service."""
        if self._indexing_service is None:
            indexing = self.settings.indexing
            self._indexing_service = IndexingService(
                content_source=self.content_source,
                chunk_store=self.chunk_store,
                chunker=self.chunker,
                repositories=self.settings.github.repositories,
                batch_size=indexing.batch_size,
                fetch_timeout_seconds=indexing.fetch_timeout_seconds,
                purge_on_startup=indexing.purge_on_startup,
            )
        return self._indexing_service

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            self._chat_service = ChatService(
                retriever=self.retriever,
                completion_client=self.completion_client,
            )
        return self._chat_service

    async def aclose(self) -> None:
        """Close HTTP clients that were created."""
        if self._content_source is not None:
            await self._content_source.aclose()
        if self._completion_client is not None:
            await self._completion_client.aclose()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._chunk_store = None
        self._content_source = None
        self._completion_client = None
        self._chunker = None
        self._retriever = None
        self._indexing_service = None
        self._chat_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_chunk_store(cache: ServiceCache = Depends(get_service_cache)) -> ChunkStore:
    return cache.chunk_store


def get_retriever(cache: ServiceCache = Depends(get_service_cache)) -> Retriever:
    """
    Get retriever instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        Retriever: Retriever over the shared chunk store
    """
    return cache.retriever


def get_chat_service(cache: ServiceCache = Depends(get_service_cache)) -> ChatService:
    return cache.chat_service


def get_indexing_service(cache: ServiceCache = Depends(get_service_cache)) -> IndexingService:
    """
    Get indexing service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        IndexingService: Indexing service for the configured repositories
    """
    return cache.indexing_service
