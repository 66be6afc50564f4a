"""
Chunk domain model.

Represents an immutable slice of one repository file plus its provenance.
Field aliases are the wire names of the durable chunk log.

Dependencies: pydantic
System role: Unit of retrieval
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Chunk(BaseModel):
    """Bounded, ordered slice of one file's text."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str | None = Field(default=None, description="Opaque identifier assigned by the store")
    file_path: str = Field(description="Path of the source file within its repository")
    text: str = Field(description="Chunk content")
    chunk_index: int = Field(ge=0, description="Zero-based position within the file")
    repository_owner: str = Field(description="Repository owner (user or organization)")
    repository_name: str = Field(description="Repository name")
    branch: str = Field(description="Branch the file was read from")
    created_at: datetime | None = Field(default=None, description="First persistence time")
    updated_at: datetime | None = Field(default=None, description="Last rewrite time")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("chunk text must contain non-whitespace characters")
        return value

    @property
    def scope(self) -> tuple[str, str, str]:
        """Provenance triple (owner, name, branch)."""
        return (self.repository_owner, self.repository_name, self.branch)

    def matches_scope(self, owner: str, name: str, branch: str | None = None) -> bool:
        """Check provenance; branch None matches every branch."""
        if self.repository_owner != owner or self.repository_name != name:
            return False
        return branch is None or self.branch == branch
