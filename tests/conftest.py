"""
Shared test fixtures and configuration for entire test suite.

Provides: chunk factory, temporary chunk store, fake content source
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import Callable

import pytest

from doc_assistant.boundary.chunk_store import ChunkStore
from doc_assistant.core.exceptions import ContentFetchError
from doc_assistant.models.chunk import Chunk
from doc_assistant.models.repository import SourceFile


@pytest.fixture
def make_chunk() -> Callable[..., Chunk]:
    """Factory for chunks with sensible provenance defaults."""

    def _make(
        text: str,
        file_path: str = "docs/guide.md",
        chunk_index: int = 0,
        owner: str = "acme",
        name: str = "docs",
        branch: str = "main",
        chunk_id: str | None = None,
    ) -> Chunk:
        return Chunk(
            id=chunk_id,
            file_path=file_path,
            text=text,
            chunk_index=chunk_index,
            repository_owner=owner,
            repository_name=name,
            branch=branch,
        )

    return _make


@pytest.fixture
def chunk_store(tmp_path) -> ChunkStore:
    """Provide an empty, loaded chunk store in a temp directory."""
    store = ChunkStore(tmp_path / "chunks" / "chunks.jsonl")
    store.load_on_startup()
    return store


class FakeContentSource:
    """
    In-memory content source.

    Keyed by (owner, name) -> {path: text}; an (owner, name, branch) key
    overrides the files of that one branch.
    """

    def __init__(self, repositories: dict[tuple[str, ...], dict[str, str]]) -> None:
        self.repositories = repositories
        self.failing_paths: set[str] = set()
        self.slow_paths: set[str] = set()
        self.failing_listings: set[tuple[str, str]] = set()
        self.gate: asyncio.Event | None = None
        self.fetch_calls: list[str] = []

    async def list_text_files(self, owner: str, name: str, branch: str) -> list[SourceFile]:
        if (owner, name) in self.failing_listings:
            raise ContentFetchError("listing failed", repository=f"{owner}/{name}", status_code=500)
        files = self._files(owner, name, branch)
        return [SourceFile(path=path, size=len(text)) for path, text in files.items()]

    async def fetch_content(self, owner: str, name: str, branch: str, path: str) -> str:
        self.fetch_calls.append(path)
        if self.gate is not None:
            await self.gate.wait()
        if path in self.slow_paths:
            await asyncio.sleep(5)
        if path in self.failing_paths:
            raise ContentFetchError("not found", repository=f"{owner}/{name}", file_path=path, status_code=404)
        return self._files(owner, name, branch)[path]

    def _files(self, owner: str, name: str, branch: str) -> dict[str, str]:
        if (owner, name, branch) in self.repositories:
            return self.repositories[(owner, name, branch)]
        return self.repositories.get((owner, name), {})


@pytest.fixture
def fake_source_factory() -> Callable[..., FakeContentSource]:
    """Factory for in-memory content sources."""
    return FakeContentSource
