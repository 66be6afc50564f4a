"""
Completion client protocol.

Dependencies: None
System role: Chat service output boundary
"""

from typing import Protocol


class CompletionClient(Protocol):
    """Generates answer text for a prompt."""

    model: str

    async def generate(self, prompt: str) -> str:
        """
        Generate text.

        Raises:
            CompletionError: Generation failed
        """
        ...
