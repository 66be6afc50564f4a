"""
Exception hierarchy for the documentation assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocAssistantException(Exception):
    """Base exception for all documentation assistant errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ContentFetchError(DocAssistantException):
    """Raised when listing or reading a file from the content source fails."""

    def __init__(
        self,
        message: str,
        repository: str | None = None,
        file_path: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize content fetch error.

        Args:
            message: Error message
            repository: owner/name of the repository
            file_path: File that failed (None for listing failures)
            status_code: HTTP status returned by the source, if any
            details: Additional context
        """
        details = details or {}
        if repository:
            details["repository"] = repository
        if file_path:
            details["file_path"] = file_path
        if status_code is not None:
            details["status_code"] = status_code
        self.repository = repository
        self.file_path = file_path
        self.status_code = status_code
        super().__init__(message, details)


class PersistenceError(DocAssistantException):
    """Raised when the durable chunk log cannot be written."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            operation: Operation that failed (append, rewrite, reset)
            path: Log file path
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if path:
            details["path"] = path
        super().__init__(message, details)


class ChunkParseError(DocAssistantException):
    """Raised when a chunk log line cannot be decoded."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parse error.

        Args:
            message: Error message
            line_number: 1-based line number in the chunk log
            details: Additional context
        """
        details = details or {}
        if line_number is not None:
            details["line_number"] = line_number
        self.line_number = line_number
        super().__init__(message, details)


class RepositoryNotConfiguredError(DocAssistantException):
    """Raised when an operation names a repository that is not configured."""

    def __init__(self, owner: str, name: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["repository"] = f"{owner}/{name}"
        super().__init__(f"Repository not configured: {owner}/{name}", details)


class IndexingInProgressError(DocAssistantException):
    """Raised when an indexing run is requested while another one is running."""

    pass


class CompletionError(DocAssistantException):
    """Raised when the completion service fails to generate text."""

    pass
