"""Durable chunk storage."""

from doc_assistant.boundary.chunk_store.jsonl_store import ChunkStore

__all__ = ["ChunkStore"]
