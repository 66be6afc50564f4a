"""FastAPI dependencies."""

from doc_assistant.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_chunk_store,
    get_indexing_service,
    get_retriever,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_chunk_store",
    "get_indexing_service",
    "get_retriever",
    "get_service_cache",
]
