"""
Test suite for the Ollama completion client.

System role: Verification of completion request/response handling
"""

import json

import httpx
import pytest

from doc_assistant.boundary.llm import OllamaCompletionClient
from doc_assistant.core.exceptions import CompletionError


def _client(handler) -> OllamaCompletionClient:
    http = httpx.AsyncClient(base_url="http://ollama.test", transport=httpx.MockTransport(handler))
    return OllamaCompletionClient(model="test-model", client=http)


class TestGenerate:
    """Non-streaming generation."""

    @pytest.mark.asyncio
    async def test_returns_generated_text(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"model": "test-model", "response": "Answer", "done": True})

        client = _client(handler)

        assert await client.generate("short prompt") == "Answer"
        assert seen["path"] == "/api/generate"
        assert seen["body"]["model"] == "test-model"
        assert seen["body"]["stream"] is False
        assert seen["body"]["options"]["num_predict"] == 512

    @pytest.mark.asyncio
    async def test_long_prompt_requests_more_tokens(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "ok"})

        await _client(handler).generate("x" * 1500)

        assert seen["body"]["options"]["num_predict"] == 2048

    @pytest.mark.asyncio
    async def test_error_status_raises_completion_error(self) -> None:
        client = _client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(CompletionError) as exc_info:
            await client.generate("prompt")

        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_missing_response_field_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"done": True}))

        with pytest.raises(CompletionError):
            await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_connection_error_raises_completion_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(CompletionError):
            await _client(handler).generate("prompt")
