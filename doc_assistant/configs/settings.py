"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from doc_assistant.configs.base import BaseSettings
from doc_assistant.configs.chunk_store import ChunkStoreSettings
from doc_assistant.configs.chunking import ChunkingSettings
from doc_assistant.configs.completion import CompletionSettings
from doc_assistant.configs.github import GitHubSettings
from doc_assistant.configs.indexing import IndexingSettings
from doc_assistant.configs.retrieval import RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    chunking: ChunkingSettings = ChunkingSettings()
    retrieval: RetrievalSettings = RetrievalSettings()
    chunk_store: ChunkStoreSettings = ChunkStoreSettings()
    indexing: IndexingSettings = IndexingSettings()
    github: GitHubSettings = GitHubSettings()
    completion: CompletionSettings = CompletionSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from doc_assistant.configs import get_settings
        settings = get_settings()
    """
    return Settings()
