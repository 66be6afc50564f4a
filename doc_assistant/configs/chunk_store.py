"""
Chunk store configuration settings.

Location of the JSON Lines chunk log.

Dependencies: pydantic, pydantic_settings
System role: ChunkStore configuration
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from doc_assistant.configs.base import BaseSettings


class ChunkStoreSettings(BaseSettings):
    """Durable chunk log location."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHUNK_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: str = Field(
        default="~/.doc-assistant/chunks",
        description="Directory holding the chunk log",
    )
    file_name: str = Field(
        default="chunks.jsonl",
        description="Chunk log file name (one JSON object per line)",
    )

    @property
    def log_path(self) -> Path:
        """Absolute path of the chunk log."""
        return Path(self.data_dir).expanduser() / self.file_name
