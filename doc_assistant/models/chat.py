"""
Chat and search request/response models.

Dependencies: pydantic
System role: API data contracts
"""

from pydantic import BaseModel, Field

from doc_assistant.models.chunk import Chunk
from doc_assistant.models.retrieval import RetrievalStrategy


class SearchRequest(BaseModel):
    """Free-text retrieval query."""

    query: str = Field(min_length=1, description="Free-text query")
    limit: int | None = Field(
        default=None,
        ge=1,
        le=500,
        description="When set, run only the top-N search with this limit",
    )


class SearchResponse(BaseModel):
    """Retrieved chunks and the strategy that produced them."""

    strategy: RetrievalStrategy
    chunks: list[Chunk]


class ChatRequest(BaseModel):
    """User question."""

    message: str = Field(min_length=1)
    include_context: bool = Field(default=True, description="Retrieve documentation context")


class ChatAnswer(BaseModel):
    """Generated answer with provenance."""

    response: str
    model: str
    strategy: RetrievalStrategy
    source_files: list[str] = Field(default_factory=list)
    response_time_ms: float
