"""Text completion clients."""

from doc_assistant.boundary.llm.base import CompletionClient
from doc_assistant.boundary.llm.ollama_client import OllamaCompletionClient

__all__ = ["CompletionClient", "OllamaCompletionClient"]
