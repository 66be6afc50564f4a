"""
Application services.

Orchestration of indexing and chat over the core and boundary layers.
"""

from doc_assistant.application.services.chat_service import ChatService
from doc_assistant.application.services.indexing_service import IndexingService

__all__ = ["ChatService", "IndexingService"]
