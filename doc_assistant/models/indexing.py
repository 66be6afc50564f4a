"""
Indexing report models.

Dependencies: pydantic
System role: Indexer results and status
"""

from datetime import datetime

from pydantic import BaseModel, Field


class FileFailure(BaseModel):
    """One file (or listing) that could not be indexed."""

    repository: str = Field(description="owner/name of the repository")
    file_path: str | None = Field(default=None, description="None for listing failures")
    error_type: str
    message: str


class IndexingReport(BaseModel):
    """Counts for one indexing run."""

    files_total: int = 0
    files_processed: int = 0
    files_failed: int = 0
    chunks_written: int = 0
    repositories_skipped: list[str] = Field(default_factory=list)
    failures: list[FileFailure] = Field(default_factory=list)
    started_at: datetime | None = None
    duration_ms: float = 0.0
    completed: bool = False

    def merge(self, other: "IndexingReport") -> None:
        """Accumulate counts of another run into this one."""
        self.files_total += other.files_total
        self.files_processed += other.files_processed
        self.files_failed += other.files_failed
        self.chunks_written += other.chunks_written
        self.repositories_skipped.extend(other.repositories_skipped)
        self.failures.extend(other.failures)


class RepositoryStatus(BaseModel):
    """Indexing state of one configured repository."""

    repository_owner: str
    repository_name: str
    branch: str
    full_name: str
    chunk_count: int
    indexing_in_progress: bool
    last_index_time: datetime | None = None
