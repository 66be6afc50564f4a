"""
Repository indexing service.

Turns the text files of every configured repository into chunks in the
chunk store. Files are fetched concurrently in fixed-size batches; each
file is an isolated unit whose failure is counted and logged without
stopping the run. Only one run executes at a time.

Dependencies: asyncio (stdlib), doc_assistant.boundary, doc_assistant.core.chunking
System role: Indexing orchestration layer
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from doc_assistant.boundary.chunk_store import ChunkStore
from doc_assistant.boundary.content_source import ContentSource
from doc_assistant.core.chunking import Chunker
from doc_assistant.core.exceptions import (
    ContentFetchError,
    IndexingInProgressError,
    PersistenceError,
    RepositoryNotConfiguredError,
)
from doc_assistant.models.chunk import Chunk
from doc_assistant.models.indexing import FileFailure, IndexingReport, RepositoryStatus
from doc_assistant.models.repository import RepositoryRef, SourceFile
from doc_assistant.observability.log_utils import log_failure, log_indexing_report

logger = logging.getLogger(__name__)


class IndexingService:
    """
    Repository indexing orchestration.

    Coordinates the content source, chunker and chunk store for the
    configured repositories and tracks per-repository status.
    """

    def __init__(
        self,
        content_source: ContentSource,
        chunk_store: ChunkStore,
        chunker: Chunker,
        repositories: Sequence[RepositoryRef],
        batch_size: int = 10,
        fetch_timeout_seconds: float = 30.0,
        purge_on_startup: bool = True,
    ) -> None:
        """
        Initialize indexing service.

        Args:
            content_source: Lists and reads repository files
            chunk_store: Destination of the produced chunks
            chunker: Splits file text into chunks
            repositories: Repositories to index
            batch_size: Files fetched concurrently per batch
            fetch_timeout_seconds: Deadline for fetching one file
            purge_on_startup: Clear the store and rebuild on startup()
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.content_source = content_source
        self.chunk_store = chunk_store
        self.chunker = chunker
        self.repositories = list(repositories)
        self.batch_size = batch_size
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self.purge_on_startup = purge_on_startup

        self._run_lock = asyncio.Lock()
        self._in_progress: set[str] = set()
        self._last_index_time: dict[str, datetime] = {}

    @property
    def is_indexing(self) -> bool:
        return self._run_lock.locked()

    @asynccontextmanager
    async def _exclusive_run(self) -> AsyncIterator[None]:
        if self._run_lock.locked():
            raise IndexingInProgressError("An indexing run is already in progress")
        async with self._run_lock:
            yield

    def _find_branches(self, owner: str, name: str) -> list[RepositoryRef]:
        branches = [r for r in self.repositories if r.owner == owner and r.name == name]
        if not branches:
            raise RepositoryNotConfiguredError(owner, name)
        return branches

    async def index_repository(self, force_reindex: bool = False) -> IndexingReport:
        """
        Index every configured repository.

        Args:
            force_reindex: Purge and rebuild every repository. Without it,
                repositories that already have chunks are skipped.

        Returns:
            IndexingReport: Counts for the whole run

        Raises:
            IndexingInProgressError: Another run is in progress
        """
        async with self._exclusive_run():
            report = IndexingReport(started_at=datetime.now(timezone.utc))
            start = time.perf_counter()
            logger.info(
                f"{__name__}:index_repository - Indexing {len(self.repositories)} repositories "
                f"(force_reindex={force_reindex})"
            )

            for repo in self.repositories:
                if force_reindex:
                    await self._purge(repo)
                elif self.chunk_store.has_scope(repo.owner, repo.name, repo.branch):
                    logger.info(
                        f"{__name__}:index_repository - Skipping {repo.full_name}@{repo.branch}, "
                        f"already indexed"
                    )
                    report.repositories_skipped.append(repo.full_name)
                    continue
                report.merge(await self._index_one(repo))

            self._finish(report, start, scope=f"{len(self.repositories)} repositories")
            return report

    async def reprocess_repository(self, owner: str, name: str) -> IndexingReport:
        """
        Purge one repository and index it again.

        Every configured branch of owner/name is rebuilt. Unchanged content
        yields the same chunk texts and indices.

        Raises:
            RepositoryNotConfiguredError: Repository is not configured
            IndexingInProgressError: Another run is in progress
        """
        branches = self._find_branches(owner, name)
        async with self._exclusive_run():
            report = IndexingReport(started_at=datetime.now(timezone.utc))
            start = time.perf_counter()
            for repo in branches:
                await self._purge(repo)
                report.merge(await self._index_one(repo))
            self._finish(report, start, scope=f"{owner}/{name}")
            return report

    async def startup(self) -> IndexingReport:
        """Initial indexing: full rebuild when purge_on_startup, else index missing repositories."""
        if self.purge_on_startup:
            removed = await asyncio.to_thread(self.chunk_store.reset)
            logger.info(f"{__name__}:startup - Purged {removed} chunks before indexing")
            return await self.index_repository(force_reindex=True)
        return await self.index_repository()

    async def run_periodic_reindex(self, interval_seconds: float) -> None:
        """
        Force a reindex every interval until cancelled.

        A run that overlaps another one is skipped; failures are logged and
        the loop keeps going.
        """
        if interval_seconds <= 0:
            logger.info(f"{__name__}:run_periodic_reindex - Scheduled reindex disabled")
            return
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                report = await self.index_repository(force_reindex=True)
                logger.info(
                    f"{__name__}:run_periodic_reindex - Scheduled reindex wrote "
                    f"{report.chunks_written} chunks"
                )
            except IndexingInProgressError:
                logger.info(f"{__name__}:run_periodic_reindex - Run in progress, skipping")
            except Exception as e:
                log_failure(logger, f"{__name__}:run_periodic_reindex - Scheduled reindex failed", e)

    def status(self) -> list[RepositoryStatus]:
        """Indexing state of every configured repository."""
        statuses = []
        for repo in self.repositories:
            key = self._key(repo)
            statuses.append(
                RepositoryStatus(
                    repository_owner=repo.owner,
                    repository_name=repo.name,
                    branch=repo.branch,
                    full_name=repo.full_name,
                    chunk_count=len(self.chunk_store.find_by_scope(repo.owner, repo.name, repo.branch)),
                    indexing_in_progress=key in self._in_progress,
                    last_index_time=self._last_index_time.get(key),
                )
            )
        return statuses

    @staticmethod
    def _key(repo: RepositoryRef) -> str:
        return f"{repo.full_name}@{repo.branch}"

    def _finish(self, report: IndexingReport, start: float, scope: str) -> None:
        report.duration_ms = round((time.perf_counter() - start) * 1000, 2)
        report.completed = True
        log_indexing_report(logger, report, scope)

    async def _purge(self, repo: RepositoryRef) -> None:
        removed = await asyncio.to_thread(
            self.chunk_store.delete_by_scope, repo.owner, repo.name, repo.branch
        )
        logger.info(f"{__name__}:_purge - Removed {removed} chunks of {self._key(repo)}")

    async def _index_one(self, repo: RepositoryRef) -> IndexingReport:
        report = IndexingReport()
        key = self._key(repo)
        self._in_progress.add(key)
        try:
            try:
                files = await self.content_source.list_text_files(repo.owner, repo.name, repo.branch)
            except Exception as e:
                logger.error(f"{__name__}:_index_one - Listing {key} failed: {e}")
                report.failures.append(
                    FileFailure(
                        repository=repo.full_name,
                        file_path=None,
                        error_type=type(e).__name__,
                        message=str(e),
                    )
                )
                return report

            report.files_total = len(files)
            logger.info(f"{__name__}:_index_one - Processing {len(files)} files of {key}")
            for offset in range(0, len(files), self.batch_size):
                batch = files[offset : offset + self.batch_size]
                await asyncio.gather(*(self._process_file(repo, f, report) for f in batch))
                logger.info(
                    f"{__name__}:_index_one - {key}: {report.files_processed + report.files_failed}"
                    f"/{report.files_total} files done"
                )

            self._last_index_time[key] = datetime.now(timezone.utc)
            return report
        finally:
            self._in_progress.discard(key)

    async def _fetch(self, repo: RepositoryRef, path: str) -> str:
        try:
            return await asyncio.wait_for(
                self.content_source.fetch_content(repo.owner, repo.name, repo.branch, path),
                timeout=self.fetch_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ContentFetchError(
                f"Fetch timed out after {self.fetch_timeout_seconds}s",
                repository=repo.full_name,
                file_path=path,
            ) from e

    async def _process_file(self, repo: RepositoryRef, source_file: SourceFile, report: IndexingReport) -> None:
        path = source_file.path
        written = 0
        try:
            text = await self._fetch(repo, path)
            pieces = self.chunker.split(text)
            for index, piece in enumerate(pieces):
                chunk = Chunk(
                    file_path=path,
                    text=piece,
                    chunk_index=index,
                    repository_owner=repo.owner,
                    repository_name=repo.name,
                    branch=repo.branch,
                )
                await asyncio.to_thread(self.chunk_store.add, chunk)
                written += 1
        except Exception as e:
            report.files_failed += 1
            report.failures.append(
                FileFailure(
                    repository=repo.full_name,
                    file_path=path,
                    error_type=type(e).__name__,
                    message=str(e),
                )
            )
            logger.warning(f"{__name__}:_process_file - Failed {repo.full_name}/{path}: {e}")
            if written:
                await self._discard_partial_file(repo, path, written)
            return

        report.chunks_written += written
        report.files_processed += 1
        logger.debug(f"{__name__}:_process_file - {path}: {len(pieces)} chunks")

    async def _discard_partial_file(self, repo: RepositoryRef, path: str, written: int) -> None:
        # A failed file contributes no chunks
        try:
            await asyncio.to_thread(
                self.chunk_store.delete_file, repo.owner, repo.name, repo.branch, path
            )
        except PersistenceError as e:
            log_failure(
                logger,
                f"{__name__}:_discard_partial_file - {written} chunks of {repo.full_name}/{path} remain",
                e,
            )
