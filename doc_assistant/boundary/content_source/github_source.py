"""
GitHub content source.

Lists and reads repository files through the GitHub REST API (GitHub.com
or Enterprise). Transient failures are retried with exponential backoff;
every failure surfaces as ContentFetchError.

Dependencies: httpx, tenacity
System role: Content source implementation
"""

import base64
import logging
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from doc_assistant.boundary.content_source.text_files import is_text_file
from doc_assistant.configs.github import GitHubSettings
from doc_assistant.core.exceptions import ContentFetchError
from doc_assistant.models.repository import SourceFile

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return False


class GitHubContentSource:
    """GitHub REST API content source."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        token: str | None = None,
        timeout_seconds: float = 30.0,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize GitHub content source.

        Args:
            base_url: API root (Enterprise: https://host/api/v3)
            token: Optional access token
            timeout_seconds: Per-request timeout
            max_attempts: Attempts per request for transient failures
            backoff_seconds: Initial backoff between attempts
            client: Preconfigured client (tests inject a mock transport)
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "doc-assistant",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
        )
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds

    @classmethod
    def from_settings(cls, settings: GitHubSettings) -> "GitHubContentSource":
        return cls(
            base_url=settings.base_url,
            token=settings.token,
            timeout_seconds=settings.request_timeout_seconds,
            max_attempts=settings.max_attempts,
        )

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_transient),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.backoff_seconds,
                max=30,
                jitter=self.backoff_seconds,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_get_json - Retry {retry_state.attempt_number}/"
                f"{self.max_attempts} for {url}"
            ),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._client.get(url, params=params)
                response.raise_for_status()
                return response.json()

    async def list_text_files(self, owner: str, name: str, branch: str) -> list[SourceFile]:
        """
        List indexable files using the recursive git trees API.

        Raises:
            ContentFetchError: Listing failed
        """
        repository = f"{owner}/{name}"
        url = f"/repos/{owner}/{name}/git/trees/{quote(branch, safe='')}"
        try:
            payload = await self._get_json(url, params={"recursive": "1"})
        except httpx.HTTPStatusError as e:
            raise ContentFetchError(
                f"Failed to list files of {repository}@{branch}",
                repository=repository,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ContentFetchError(
                f"Failed to list files of {repository}@{branch}: {e}",
                repository=repository,
            ) from e

        if not isinstance(payload, dict):
            raise ContentFetchError(
                "Unexpected git trees response",
                repository=repository,
            )
        if payload.get("truncated"):
            logger.warning(
                f"{__name__}:list_text_files - Tree listing truncated for {repository}@{branch}"
            )

        files = [
            SourceFile(path=entry["path"], size=entry.get("size") or 0)
            for entry in payload.get("tree", [])
            if entry.get("type") == "blob" and is_text_file(entry.get("path"))
        ]
        logger.info(f"{__name__}:list_text_files - Found {len(files)} text files in {repository}@{branch}")
        return files

    async def fetch_content(self, owner: str, name: str, branch: str, path: str) -> str:
        """
        Read one file through the contents API.

        Content is base64-decoded as UTF-8; undecodable bytes are replaced.

        Raises:
            ContentFetchError: File could not be read
        """
        repository = f"{owner}/{name}"
        url = f"/repos/{owner}/{name}/contents/{quote(path, safe='/')}"
        try:
            payload = await self._get_json(url, params={"ref": branch})
        except httpx.HTTPStatusError as e:
            raise ContentFetchError(
                f"Failed to fetch {path}",
                repository=repository,
                file_path=path,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ContentFetchError(
                f"Failed to fetch {path}: {e}",
                repository=repository,
                file_path=path,
            ) from e

        if not isinstance(payload, dict) or payload.get("type", "file") != "file":
            raise ContentFetchError(
                f"Not a file: {path}",
                repository=repository,
                file_path=path,
            )

        encoded = payload.get("content")
        if encoded is None or payload.get("encoding") not in (None, "base64"):
            raise ContentFetchError(
                f"No inline content for {path} (encoding={payload.get('encoding')})",
                repository=repository,
                file_path=path,
            )
        try:
            raw = base64.b64decode(encoded)
        except ValueError as e:
            raise ContentFetchError(
                f"Invalid base64 content for {path}",
                repository=repository,
                file_path=path,
            ) from e
        return raw.decode("utf-8", errors="replace")

    async def aclose(self) -> None:
        """Release the HTTP client."""
        await self._client.aclose()
