"""
Completion service configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Ollama completion client configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from doc_assistant.configs.base import BaseSettings


class CompletionSettings(BaseSettings):
    """Ollama text generation endpoint."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OLLAMA_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(default="http://localhost:11434", description="Ollama server URL")
    model: str = Field(default="llama3.1", description="Model used for answers")
    timeout_seconds: float = Field(default=120.0, gt=0, description="Generation timeout")
