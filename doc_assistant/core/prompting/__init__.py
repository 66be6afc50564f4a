"""Prompt construction for documentation answers."""

from doc_assistant.core.prompting.prompt_builder import build_context, build_prompt, wants_complete_content

__all__ = ["build_context", "build_prompt", "wants_complete_content"]
