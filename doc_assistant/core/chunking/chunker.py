"""
Paragraph-then-sentence text chunker.

Splits raw file text into bounded chunks: paragraphs are accumulated greedily
up to max_chunk_size, oversized paragraphs fall back to sentence granularity,
and fragments below min_viable_size are dropped. The output is a pure function
of its input so reindexing unchanged content reproduces the same chunks.

Dependencies: re (stdlib)
System role: First stage of repository indexing
"""

import re

from doc_assistant.configs.chunking import ChunkingSettings

DEFAULT_MAX_CHUNK_SIZE = 3000
DEFAULT_MIN_VIABLE_SIZE = 50

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "

# One newline followed by one or more blank (or whitespace-only) lines.
_PARAGRAPH_BREAK = re.compile(r"\n(?:[ \t]*\n)+")
# The period stays with its sentence; only the space is consumed.
_SENTENCE_BREAK = re.compile(r"(?<=\.) ")


def _fits(buffer: str, piece: str, separator: str, max_chunk_size: int) -> bool:
    if not buffer:
        return len(piece) <= max_chunk_size
    return len(buffer) + len(separator) + len(piece) <= max_chunk_size


def _join(buffer: str, piece: str, separator: str) -> str:
    return f"{buffer}{separator}{piece}" if buffer else piece


def split_text(
    text: str | None,
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
    min_viable_size: int = DEFAULT_MIN_VIABLE_SIZE,
) -> list[str]:
    """
    Split text into ordered chunk texts.

    Args:
        text: Raw file content
        max_chunk_size: Maximum chunk length in characters
        min_viable_size: Minimum trimmed length of a kept chunk

    Returns:
        list[str]: Chunk texts in document order. Every chunk is at most
            max_chunk_size long except a single sentence that alone exceeds it.

    Raises:
        ValueError: When max_chunk_size is not positive or min_viable_size is negative
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if min_viable_size < 0:
        raise ValueError(f"min_viable_size must not be negative, got {min_viable_size}")
    if not text or not text.strip():
        return []

    chunks: list[str] = []
    buffer = ""

    for paragraph in _PARAGRAPH_BREAK.split(text):
        if not paragraph.strip():
            continue

        if _fits(buffer, paragraph, PARAGRAPH_SEPARATOR, max_chunk_size):
            buffer = _join(buffer, paragraph, PARAGRAPH_SEPARATOR)
            continue

        if buffer:
            chunks.append(buffer)
            buffer = ""

        if len(paragraph) <= max_chunk_size:
            buffer = paragraph
            continue

        # Oversized paragraph: same greedy rule at sentence granularity.
        # The trailing buffer stays open for the next paragraph.
        for sentence in _SENTENCE_BREAK.split(paragraph):
            if not sentence:
                continue
            if _fits(buffer, sentence, SENTENCE_SEPARATOR, max_chunk_size):
                buffer = _join(buffer, sentence, SENTENCE_SEPARATOR)
            else:
                if buffer:
                    chunks.append(buffer)
                buffer = sentence

    if buffer:
        chunks.append(buffer)

    floor = max(min_viable_size, 1)
    return [chunk for chunk in chunks if len(chunk.strip()) >= floor]


class Chunker:
    """Chunker bound to configured size limits."""

    def __init__(
        self,
        max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
        min_viable_size: int = DEFAULT_MIN_VIABLE_SIZE,
    ) -> None:
        """
        Initialize chunker.

        Args:
            max_chunk_size: Maximum chunk length in characters
            min_viable_size: Minimum trimmed length of a kept chunk

        Raises:
            ValueError: When the limits are invalid
        """
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        if min_viable_size < 0:
            raise ValueError(f"min_viable_size must not be negative, got {min_viable_size}")
        self.max_chunk_size = max_chunk_size
        self.min_viable_size = min_viable_size

    @classmethod
    def from_settings(cls, settings: ChunkingSettings) -> "Chunker":
        """Build a chunker from ChunkingSettings."""
        return cls(
            max_chunk_size=settings.max_chunk_size,
            min_viable_size=settings.min_viable_size,
        )

    def split(self, text: str | None) -> list[str]:
        """Split text with the configured limits."""
        return split_text(text, self.max_chunk_size, self.min_viable_size)
