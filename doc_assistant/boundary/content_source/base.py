"""
Content source protocol.

Dependencies: doc_assistant.models.repository
System role: Indexer input boundary
"""

from typing import Protocol

from doc_assistant.models.repository import SourceFile


class ContentSource(Protocol):
    """Read access to the text files of a repository branch."""

    async def list_text_files(self, owner: str, name: str, branch: str) -> list[SourceFile]:
        """
        List the indexable text files of a repository branch.

        Raises:
            ContentFetchError: Listing failed
        """
        ...

    async def fetch_content(self, owner: str, name: str, branch: str, path: str) -> str:
        """
        Read one file as text.

        Raises:
            ContentFetchError: File could not be read
        """
        ...
