"""
Retrieval result models.

Transient per-query structures; never persisted.

Dependencies: pydantic
System role: Retriever return types
"""

from enum import Enum

from pydantic import BaseModel, Field

from doc_assistant.models.chunk import Chunk


class RetrievalStrategy(str, Enum):
    """Fallback chain stage that produced a result."""

    BEST_FILE = "best_file"
    RELEVANT_CHUNKS = "relevant_chunks"
    KEYWORD_FALLBACK = "keyword_fallback"
    NONE = "none"


class ScoredChunk(BaseModel):
    """Chunk with its relevance score for one query."""

    chunk: Chunk
    score: float = Field(ge=0.0)


class FileScore(BaseModel):
    """Aggregate of one file's chunk scores."""

    file_path: str
    repository_owner: str
    repository_name: str
    branch: str
    score: float = Field(description="Top-K average plus filename bonus")
    top_k_average: float
    filename_bonus: float
    max_chunk_score: float
    chunk_count: int

    @property
    def sort_key(self) -> tuple[str, str, str, str]:
        """Deterministic tie-break key."""
        return (self.file_path, self.repository_owner, self.repository_name, self.branch)


class RetrievalResult(BaseModel):
    """Output of the fallback chain."""

    strategy: RetrievalStrategy
    chunks: list[Chunk] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.chunks
