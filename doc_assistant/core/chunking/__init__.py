"""Text chunking."""

from .chunker import Chunker, split_text

__all__ = ["Chunker", "split_text"]
