"""Domain and API models."""

from .chat import ChatAnswer, ChatRequest, SearchRequest, SearchResponse
from .chunk import Chunk
from .indexing import FileFailure, IndexingReport, RepositoryStatus
from .repository import RepositoryRef, SourceFile
from .retrieval import FileScore, RetrievalResult, RetrievalStrategy, ScoredChunk

__all__ = [
    "ChatAnswer",
    "ChatRequest",
    "Chunk",
    "FileFailure",
    "FileScore",
    "IndexingReport",
    "RepositoryRef",
    "RepositoryStatus",
    "RetrievalResult",
    "RetrievalStrategy",
    "ScoredChunk",
    "SearchRequest",
    "SearchResponse",
    "SourceFile",
]
