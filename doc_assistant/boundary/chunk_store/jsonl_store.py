"""
JSON Lines chunk store.

Keeps every chunk in memory and mirrors it to an append-only log with one
JSON object per line. Appends are flushed and fsynced before the chunk is
published; scope deletes rewrite the log to a sibling file and atomically
replace it. Readers get snapshot copies, so queries never see a torn index.

Dependencies: pydantic, doc_assistant.models.chunk
System role: Durable chunk persistence
"""

import logging
import os
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from doc_assistant.core.exceptions import ChunkParseError, PersistenceError
from doc_assistant.models.chunk import Chunk

logger = logging.getLogger(__name__)


def encode_chunk(chunk: Chunk) -> str:
    """Serialize a chunk to one log line (without newline)."""
    return chunk.model_dump_json(by_alias=True)


def decode_chunk(line: str | bytes, line_number: int | None = None) -> Chunk:
    """
    Decode one log line.

    Raises:
        ChunkParseError: Line is not valid UTF-8 or not a valid chunk object
    """
    try:
        text = line.decode("utf-8") if isinstance(line, bytes) else line
    except UnicodeDecodeError as e:
        raise ChunkParseError(
            f"Invalid UTF-8 in chunk record at byte {e.start}",
            line_number=line_number,
        ) from e
    try:
        return Chunk.model_validate_json(text)
    except ValidationError as e:
        raise ChunkParseError(
            f"Invalid chunk record: {e.error_count()} validation error(s)",
            line_number=line_number,
            details={"errors": [err["msg"] for err in e.errors()][:3]},
        ) from e


class ChunkStore:
    """In-memory chunk index backed by a JSON Lines log."""

    def __init__(self, log_path: str | Path) -> None:
        """
        Initialize store. Nothing is read until load_on_startup().

        Args:
            log_path: Path of the chunk log file
        """
        self._path = Path(log_path).expanduser()
        self._chunks: list[Chunk] = []
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_file(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch(exist_ok=True)
        except OSError as e:
            raise PersistenceError(
                f"Cannot create chunk log: {e}",
                operation="create",
                path=str(self._path),
            ) from e

    def load_on_startup(self) -> int:
        """
        Replay the log into memory, replacing the current index.

        Undecodable lines are logged and skipped. Duplicate ids keep the
        last occurrence so replay is idempotent. A trailing line cut short
        by a crash (no newline) is truncated away, or terminated when it
        still decodes, so later appends start on a fresh line.

        Returns:
            int: Number of chunks loaded
        """
        with self._lock:
            self._ensure_file()
            by_id: dict[str, Chunk] = {}
            skipped = 0
            offset = 0
            tail_start: int | None = None
            tail_valid = False
            with self._path.open("rb") as handle:
                for line_number, raw in enumerate(handle, start=1):
                    line_start = offset
                    offset += len(raw)
                    unterminated = not raw.endswith(b"\n")
                    line = raw.strip()
                    if not line:
                        continue
                    try:
                        chunk = decode_chunk(line, line_number)
                    except ChunkParseError as e:
                        skipped += 1
                        logger.warning(f"{__name__}:load_on_startup - Skipping line: {e}")
                        if unterminated:
                            tail_start = line_start
                        continue
                    if unterminated:
                        tail_start, tail_valid = line_start, True
                    if chunk.id is None:
                        chunk = chunk.model_copy(update={"id": str(uuid.uuid4())})
                    # Re-inserting moves a replayed id to its latest position
                    by_id.pop(chunk.id, None)
                    by_id[chunk.id] = chunk
            if tail_start is not None:
                self._repair_tail(tail_start, keep=tail_valid)
            self._chunks = list(by_id.values())

        logger.info(
            f"{__name__}:load_on_startup - Loaded {len(self._chunks)} chunks "
            f"from {self._path} ({skipped} lines skipped)"
        )
        return len(self._chunks)

    def _repair_tail(self, tail_start: int, keep: bool) -> None:
        try:
            with self._path.open("r+b") as handle:
                if keep:
                    handle.seek(0, os.SEEK_END)
                    handle.write(b"\n")
                else:
                    handle.truncate(tail_start)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as e:
            raise PersistenceError(
                f"Failed to repair torn chunk log tail: {e}",
                operation="repair",
                path=str(self._path),
            ) from e
        logger.warning(
            f"{__name__}:load_on_startup - "
            + ("Terminated unfinished last line" if keep else f"Truncated torn tail at byte {tail_start}")
        )

    def add(self, chunk: Chunk) -> Chunk:
        """
        Persist a chunk and publish it to readers.

        Args:
            chunk: Chunk to store; id and timestamps are filled in

        Returns:
            Chunk: The stored chunk

        Raises:
            PersistenceError: Append failed; the chunk is not visible
        """
        now = datetime.now(timezone.utc)
        stored = chunk.model_copy(
            update={
                "id": chunk.id or str(uuid.uuid4()),
                "created_at": chunk.created_at or now,
                "updated_at": now,
            }
        )
        line = encode_chunk(stored) + "\n"

        with self._lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", encoding="utf-8") as handle:
                    handle.write(line)
                    handle.flush()
                    os.fsync(handle.fileno())
            except OSError as e:
                raise PersistenceError(
                    f"Failed to append chunk: {e}",
                    operation="append",
                    path=str(self._path),
                    details={"file_path": chunk.file_path, "chunk_index": chunk.chunk_index},
                ) from e
            self._chunks.append(stored)
        return stored

    def find_all(self) -> list[Chunk]:
        """Snapshot of every stored chunk."""
        with self._lock:
            return list(self._chunks)

    def find_by_scope(self, owner: str, name: str, branch: str | None = None) -> list[Chunk]:
        """Snapshot of the chunks of one repository (optionally one branch)."""
        return [c for c in self.find_all() if c.matches_scope(owner, name, branch)]

    def count(self) -> int:
        with self._lock:
            return len(self._chunks)

    def has_scope(self, owner: str, name: str, branch: str | None = None) -> bool:
        return any(c.matches_scope(owner, name, branch) for c in self.find_all())

    def _rewrite(self, chunks: list[Chunk], operation: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                for chunk in chunks:
                    handle.write(encode_chunk(chunk) + "\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(
                f"Failed to rewrite chunk log: {e}",
                operation=operation,
                path=str(self._path),
            ) from e

    def _delete_where(self, predicate: Callable[[Chunk], bool], operation: str) -> int:
        with self._lock:
            keep = [c for c in self._chunks if not predicate(c)]
            removed = len(self._chunks) - len(keep)
            if removed == 0:
                return 0
            self._rewrite(keep, operation=operation)
            self._chunks = keep
        return removed

    def delete_by_scope(self, owner: str, name: str, branch: str | None = None) -> int:
        """
        Remove every chunk of a repository (optionally one branch).

        The surviving chunks are written to a temporary file that atomically
        replaces the log; memory is swapped only after the replace.

        Returns:
            int: Number of chunks removed

        Raises:
            PersistenceError: Rewrite failed; log and memory are unchanged
        """
        removed = self._delete_where(
            lambda c: c.matches_scope(owner, name, branch), operation="delete_by_scope"
        )
        if removed:
            logger.info(
                f"{__name__}:delete_by_scope - Removed {removed} chunks for {owner}/{name}"
                + (f"@{branch}" if branch else "")
            )
        return removed

    def delete_file(self, owner: str, name: str, branch: str, file_path: str) -> int:
        """Remove the chunks of one file of one branch; same guarantees as delete_by_scope."""
        removed = self._delete_where(
            lambda c: c.file_path == file_path and c.matches_scope(owner, name, branch),
            operation="delete_file",
        )
        logger.info(
            f"{__name__}:delete_file - Removed {removed} chunks of {owner}/{name}@{branch}/{file_path}"
        )
        return removed

    def reset(self) -> int:
        """
        Truncate log and index.

        Returns:
            int: Number of chunks removed
        """
        with self._lock:
            removed = len(self._chunks)
            self._rewrite([], operation="reset")
            self._chunks = []
        logger.info(f"{__name__}:reset - Cleared {removed} chunks")
        return removed

    def size_on_disk_bytes(self) -> int:
        """Log size in bytes, -1 when the file does not exist."""
        try:
            return self._path.stat().st_size
        except FileNotFoundError:
            return -1
