"""Repository content sources."""

from doc_assistant.boundary.content_source.base import ContentSource
from doc_assistant.boundary.content_source.github_source import GitHubContentSource
from doc_assistant.boundary.content_source.text_files import is_text_file

__all__ = ["ContentSource", "GitHubContentSource", "is_text_file"]
