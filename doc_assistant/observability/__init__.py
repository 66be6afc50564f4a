"""
Observability module.

Provides logging configuration, safe structured logging helpers and
request logging middleware.
"""

from doc_assistant.observability.logger import configure_logging

__all__ = ["configure_logging"]
