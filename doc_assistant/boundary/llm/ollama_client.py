"""
Ollama completion client.

Non-streaming calls to the Ollama /api/generate endpoint. Short prompts
request fewer tokens to keep answers fast.

Dependencies: httpx
System role: Completion client implementation
"""

import logging
from typing import Any

import httpx

from doc_assistant.configs.completion import CompletionSettings
from doc_assistant.core.exceptions import CompletionError

logger = logging.getLogger(__name__)

SHORT_PROMPT_CHARS = 1200
SHORT_PROMPT_PREDICT = 512
LONG_PROMPT_PREDICT = 2048
CONTEXT_WINDOW = 8192


class OllamaCompletionClient:
    """Ollama text generation client."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.1",
        timeout_seconds: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.model = model
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )

    @classmethod
    def from_settings(cls, settings: CompletionSettings) -> "OllamaCompletionClient":
        return cls(
            base_url=settings.base_url,
            model=settings.model,
            timeout_seconds=settings.timeout_seconds,
        )

    def _request_body(self, prompt: str) -> dict[str, Any]:
        num_predict = SHORT_PROMPT_PREDICT if len(prompt) < SHORT_PROMPT_CHARS else LONG_PROMPT_PREDICT
        return {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": 0.1,
                "top_p": 0.9,
                "num_predict": num_predict,
                "num_ctx": CONTEXT_WINDOW,
            },
        }

    async def generate(self, prompt: str) -> str:
        """
        Generate a completion.

        Args:
            prompt: Full prompt text

        Returns:
            str: Generated text

        Raises:
            CompletionError: Request failed or the response has no text
        """
        logger.debug(f"{__name__}:generate - Generating with model {self.model}")
        try:
            response = await self._client.post("/api/generate", json=self._request_body(prompt))
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise CompletionError(
                f"Ollama returned status {e.response.status_code}",
                details={"model": self.model, "status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise CompletionError(
                f"Failed to reach Ollama: {e}",
                details={"model": self.model},
            ) from e

        text = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise CompletionError(
                "Ollama response has no generated text",
                details={"model": self.model},
            )
        return text

    async def aclose(self) -> None:
        """Release the HTTP client."""
        await self._client.aclose()
