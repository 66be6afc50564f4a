"""
Indexing API endpoints.

Routes:
- POST /indexing/reindex - Start a forced reindex in the background
- POST /indexing/repositories/{owner}/{name}/reprocess - Purge and reindex one repository
- GET /indexing/status - Per-repository indexing status

Dependencies: doc_assistant.application.services.indexing_service
System role: Indexing HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from pydantic import BaseModel

from doc_assistant.api.deps import get_chunk_store, get_indexing_service
from doc_assistant.application.services import IndexingService
from doc_assistant.boundary.chunk_store import ChunkStore
from doc_assistant.core.exceptions import IndexingInProgressError, RepositoryNotConfiguredError
from doc_assistant.models.indexing import IndexingReport, RepositoryStatus
from doc_assistant.observability.log_utils import log_failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/indexing", tags=["indexing"])


class ReindexResponse(BaseModel):
    """Accepted reindex request."""

    status: str
    message: str


class IndexingStatusResponse(BaseModel):
    """Indexing status of all configured repositories."""

    is_indexing: bool
    total_chunks: int
    store_size_bytes: int
    repositories: list[RepositoryStatus]


async def _run_reindex(indexing_service: IndexingService) -> None:
    try:
        await indexing_service.index_repository(force_reindex=True)
    except IndexingInProgressError:
        logger.info(f"{__name__}:_run_reindex - Another run started first, skipping")
    except Exception as e:
        log_failure(logger, f"{__name__}:_run_reindex - Reindex failed", e)


@router.post("/reindex", response_model=ReindexResponse, status_code=status.HTTP_202_ACCEPTED)
async def reindex(
    background_tasks: BackgroundTasks,
    indexing_service: IndexingService = Depends(get_indexing_service),
) -> ReindexResponse:
    """
    Start a forced reindex of every configured repository.

    Raises:
        HTTPException(409): A run is already in progress
    """
    if indexing_service.is_indexing:
        raise HTTPException(status_code=409, detail="Indexing already in progress")
    background_tasks.add_task(_run_reindex, indexing_service)
    return ReindexResponse(status="accepted", message="Reindex started")


@router.post("/repositories/{owner}/{name}/reprocess", response_model=IndexingReport)
async def reprocess_repository(
    owner: str,
    name: str,
    indexing_service: IndexingService = Depends(get_indexing_service),
) -> IndexingReport:
    """
    Purge one repository and index it again.

    Raises:
        HTTPException(404): Repository not configured
        HTTPException(409): A run is already in progress
    """
    try:
        return await indexing_service.reprocess_repository(owner, name)
    except RepositoryNotConfiguredError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except IndexingInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.get("/status", response_model=IndexingStatusResponse)
async def indexing_status(
    indexing_service: IndexingService = Depends(get_indexing_service),
    store: ChunkStore = Depends(get_chunk_store),
) -> IndexingStatusResponse:
    """Per-repository chunk counts, in-progress flags and store size."""
    return IndexingStatusResponse(
        is_indexing=indexing_service.is_indexing,
        total_chunks=store.count(),
        store_size_bytes=store.size_on_disk_bytes(),
        repositories=indexing_service.status(),
    )
