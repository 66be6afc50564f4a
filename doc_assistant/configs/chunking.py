"""
Chunking configuration settings.

Size limits applied when splitting repository files into chunks.

Dependencies: pydantic, pydantic_settings
System role: Chunker configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from doc_assistant.configs.base import BaseSettings


class ChunkingSettings(BaseSettings):
    """Chunk size limits."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    max_chunk_size: int = Field(
        default=3000,
        gt=0,
        description="Maximum chunk size in characters (a single longer sentence is kept whole)",
    )
    min_viable_size: int = Field(
        default=50,
        ge=0,
        description="Chunks whose trimmed length is below this are discarded",
    )
