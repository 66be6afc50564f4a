"""
Repository and source file models.

Dependencies: pydantic
System role: Content source data structures
"""

from pydantic import BaseModel, Field


class RepositoryRef(BaseModel):
    """One repository/branch to index."""

    owner: str = Field(description="Repository owner (organization or user)")
    name: str = Field(description="Repository name")
    branch: str = Field(default="main", description="Branch to index")

    @property
    def full_name(self) -> str:
        """owner/name identifier used by the GitHub API."""
        return f"{self.owner}/{self.name}"


class SourceFile(BaseModel):
    """File listed by a content source."""

    path: str = Field(description="Path within the repository")
    size: int = Field(default=0, ge=0, description="Size in bytes when known")
