"""
Retrieval configuration settings.

Ranking knobs for best-file aggregation and the top-N fallback searches.

Dependencies: pydantic, pydantic_settings
System role: Retriever configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from doc_assistant.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Keyword retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k_files: int = Field(
        default=5,
        ge=1,
        description="Number of best chunk scores averaged into a file score",
    )
    relevant_limit: int = Field(
        default=25,
        ge=1,
        description="Result limit for the scored top-N search",
    )
    keyword_limit: int = Field(
        default=50,
        ge=1,
        description="Result limit for the widened keyword fallback search",
    )
    filename_bonus: float = Field(
        default=20.0,
        ge=0.0,
        description="Bonus per query word found in a file path (best-file mode)",
    )
    synonyms_path: str | None = Field(
        default=None,
        description="Optional JSON file replacing the built-in synonym table",
    )
