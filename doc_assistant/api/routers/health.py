"""
Health check API endpoints.

Routes: GET /health

Dependencies: doc_assistant.boundary.chunk_store
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from doc_assistant.api.deps import get_chunk_store, get_indexing_service
from doc_assistant.application.services import IndexingService
from doc_assistant.boundary.chunk_store import ChunkStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    total_chunks: int
    indexing_in_progress: bool


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    store: ChunkStore = Depends(get_chunk_store),
    indexing_service: IndexingService = Depends(get_indexing_service),
) -> HealthResponse:
    """Basic health check with index size."""
    return HealthResponse(
        status="healthy",
        total_chunks=store.count(),
        indexing_in_progress=indexing_service.is_indexing,
    )
