"""
FastAPI application with assembled routers.

Initializes the FastAPI app, replays the chunk log on startup and runs
initial and scheduled indexing in the background.

Dependencies: fastapi, uvicorn, doc_assistant.api.routers
System role: API entry point with router assembly and server launch
"""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doc_assistant import __version__
from doc_assistant.api.deps.dependencies import get_service_cache
from doc_assistant.application.services import IndexingService
from doc_assistant.configs import get_settings
from doc_assistant.observability.log_utils import log_failure
from doc_assistant.observability.logger import configure_logging
from doc_assistant.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, health_router, indexing_router, search_router

logger = logging.getLogger(__name__)


async def _initial_indexing(indexing_service: IndexingService) -> None:
    try:
        report = await indexing_service.startup()
        logger.info(
            f"{__name__}:_initial_indexing - Initial indexing wrote {report.chunks_written} chunks "
            f"({report.files_failed} files failed)"
        )
    except Exception as e:
        log_failure(logger, f"{__name__}:_initial_indexing - Initial indexing failed", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup replays the chunk log and schedules indexing; shutdown cancels
    background work and closes HTTP clients.
    """
    cache = get_service_cache()
    settings = cache.settings
    configure_logging(settings.log_level)

    # Startup
    loaded = await asyncio.to_thread(cache.chunk_store.load_on_startup)
    logger.info(f"{__name__}:lifespan - Chunk store ready with {loaded} chunks")

    background: list[asyncio.Task] = []
    indexing_service = cache.indexing_service
    if not settings.github.repositories:
        logger.warning(f"{__name__}:lifespan - No repositories configured, indexing disabled")
    else:
        if settings.indexing.index_on_startup:
            background.append(asyncio.create_task(_initial_indexing(indexing_service)))
        if settings.indexing.reindex_interval_seconds > 0:
            background.append(
                asyncio.create_task(
                    indexing_service.run_periodic_reindex(settings.indexing.reindex_interval_seconds)
                )
            )

    yield

    # Shutdown
    for task in background:
        task.cancel()
    await asyncio.gather(*background, return_exceptions=True)
    await cache.aclose()
    cache.clear()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Documentation Assistant API",
        description="Keyword retrieval and chat over GitHub documentation repositories",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(indexing_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "doc_assistant.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
