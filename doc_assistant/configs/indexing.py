"""
Indexing configuration settings.

Batching, timeouts and startup behaviour of repository indexing.

Dependencies: pydantic, pydantic_settings
System role: Indexer configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from doc_assistant.configs.base import BaseSettings


class IndexingSettings(BaseSettings):
    """Repository indexing configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INDEXING_",
        case_sensitive=False,
        extra="ignore",
    )

    batch_size: int = Field(
        default=10,
        ge=1,
        description="Files processed concurrently per batch",
    )
    fetch_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Deadline for fetching one file from the content source",
    )
    purge_on_startup: bool = Field(
        default=True,
        description="Purge and rebuild every configured repository at startup",
    )
    index_on_startup: bool = Field(
        default=True,
        description="Start indexing in the background when the API starts",
    )
    reindex_interval_seconds: int = Field(
        default=21600,
        ge=0,
        description="Scheduled forced reindex interval (0 disables)",
    )
