"""
GitHub content source configuration.

Works with GitHub.com and GitHub Enterprise (set base_url to the
Enterprise API root, e.g. https://github.example.com/api/v3).

Dependencies: pydantic, pydantic_settings
System role: Content source configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from doc_assistant.configs.base import BaseSettings

from doc_assistant.models.repository import RepositoryRef


class GitHubSettings(BaseSettings):
    """GitHub API access and the repositories to index."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GITHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL",
    )
    token: str | None = Field(
        default=None,
        description="Personal access token or OAuth token",
    )
    repositories: list[RepositoryRef] = Field(
        default_factory=list,
        description='Repositories to index, JSON: [{"owner": "...", "name": "...", "branch": "main"}]',
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout per GitHub API request",
    )
    max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for transient GitHub failures (exponential backoff)",
    )
