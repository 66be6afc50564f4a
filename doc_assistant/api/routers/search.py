"""
Search API endpoints.

Routes:
- POST /search - Retrieve chunks through the fallback chain (or plain top-N with limit)
- GET /search/best-file - All chunks of the best matching file

Dependencies: doc_assistant.core.retrieval
System role: Retrieval HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from doc_assistant.api.deps import get_retriever
from doc_assistant.core.retrieval import Retriever
from doc_assistant.models.chat import SearchRequest, SearchResponse
from doc_assistant.models.retrieval import RetrievalStrategy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    retriever: Retriever = Depends(get_retriever),
) -> SearchResponse:
    """
    Retrieve documentation chunks for a query.

    Without a limit the best-file -> top-N -> keyword fallback chain runs;
    with a limit only the scored top-N search runs.

    Args:
        request: Query and optional limit
        retriever: Injected Retriever

    Returns:
        SearchResponse: Chunks and the strategy that produced them
    """
    if request.limit is not None:
        chunks = retriever.find_relevant_chunks(request.query, limit=request.limit)
        strategy = RetrievalStrategy.RELEVANT_CHUNKS if chunks else RetrievalStrategy.NONE
        return SearchResponse(strategy=strategy, chunks=chunks)

    result = retriever.retrieve(request.query)
    return SearchResponse(strategy=result.strategy, chunks=result.chunks)


@router.get("/best-file", response_model=SearchResponse)
async def best_file(
    query: str = Query(min_length=1, description="Free-text query"),
    retriever: Retriever = Depends(get_retriever),
) -> SearchResponse:
    """Chunks of the single best matching file, in chunk order."""
    chunks = retriever.find_best_matching_file(query)
    strategy = RetrievalStrategy.BEST_FILE if chunks else RetrievalStrategy.NONE
    return SearchResponse(strategy=strategy, chunks=chunks)
