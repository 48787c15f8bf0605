"""HTTP access helper shared by all provider backends.

Wraps an ``httpx.AsyncClient`` with the operations backends need: raw byte
fetches, JSON decoding (including Gitiles' non-executable JSON), and an
atomic, bounded-concurrency batch fetch of file contents.
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any, Sequence

import httpx
from loguru import logger

from ..core.config import Config
from ..core.exceptions import NotFoundError, RemoteError
from ..core.types import File
from .content import RawContentReader

if TYPE_CHECKING:
    from .content import ContentReader


# Prefix Gitiles puts in front of JSON responses to prevent script inclusion.
_NON_EXECUTABLE_PREFIX = b")]}'"


def create_http_client(config: Config | None = None) -> httpx.AsyncClient:
    """Create the shared async HTTP client.

    Args:
        config: Application configuration. Defaults are used if None.

    Returns:
        Configured httpx.AsyncClient. The caller owns and closes it.
    """
    config = config or Config()
    return httpx.AsyncClient(
        timeout=config.fetch.timeout,
        follow_redirects=True,
        headers={"User-Agent": config.fetch.user_agent},
    )


def _host(url: str) -> str:
    try:
        return httpx.URL(url).host
    except httpx.InvalidURL:
        return url


class HTTPHelper:
    """Provider-agnostic request helper.

    Example:
        async with create_http_client() as client:
            http = HTTPHelper(client)
            response, data = await http.get_json("https://gitlab.com/api/v4/projects/1")
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str] | None = None,
        max_concurrency: int = 4,
    ) -> None:
        """Initialize the helper.

        Args:
            client: Shared async client used for every request.
            headers: Extra headers sent with each request.
            max_concurrency: Upper bound on concurrent requests in get_files.
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._client = client
        self._headers = dict(headers or {})
        self._max_concurrency = max_concurrency

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: Config) -> "HTTPHelper":
        """Create a helper using the configured concurrency bound."""
        return cls(client, max_concurrency=config.fetch.max_concurrency)

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Issue a GET request.

        Args:
            url: Request URL.
            params: Query parameters, encoded by httpx.

        Raises:
            RemoteError: If the request fails at the transport level.
        """
        logger.debug(f"GET {url}" + (f" {params}" if params else ""))
        try:
            return await self._client.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as e:
            raise RemoteError(_host(url), f"request failed: {e}") from e

    def error_for(self, response: httpx.Response) -> Exception:
        """Translate a non-200 response into the matching error."""
        url = str(response.request.url)
        if response.status_code == 404:
            return NotFoundError(f"Resource not found: {url}")
        return RemoteError(response.request.url.host, f"{response.status_code}: ({url})")

    async def get_bytes(self, url: str) -> bytes:
        """Fetch a URL and return its body.

        Raises:
            NotFoundError: On HTTP 404.
            RemoteError: On any other non-200 status or transport failure.
        """
        response = await self.get(url)
        if response.status_code != 200:
            raise self.error_for(response)
        return response.content

    async def get_json(
        self, url: str, params: dict[str, Any] | None = None
    ) -> tuple[httpx.Response, Any]:
        """Fetch a URL and decode its JSON body.

        Args:
            url: Request URL.
            params: Query parameters, encoded by httpx.

        Returns:
            Tuple of the response (for headers) and the decoded value.

        Raises:
            NotFoundError: On HTTP 404.
            RemoteError: On other failures, including malformed JSON.
        """
        response = await self.get(url, params)
        if response.status_code != 200:
            raise self.error_for(response)
        return response, self._decode(url, response.content)

    async def get_non_executable_json(self, url: str) -> tuple[httpx.Response, Any]:
        """Like get_json, but strips the ``)]}'`` anti-XSSI prefix first."""
        response = await self.get(url)
        if response.status_code != 200:
            raise self.error_for(response)
        body = response.content
        if body.startswith(_NON_EXECUTABLE_PREFIX):
            body = body[len(_NON_EXECUTABLE_PREFIX):]
        return response, self._decode(url, body)

    async def get_files(
        self,
        urls: Sequence[str],
        files: Sequence[File],
        reader: "ContentReader | None" = None,
    ) -> None:
        """Fetch ``urls[i]`` into ``files[i].data`` concurrently.

        The batch is atomic: the first failure cancels the outstanding
        requests and is re-raised, leaving no partial result to use.

        Args:
            urls: Content URLs, parallel to ``files``.
            files: Files to populate.
            reader: Content reader; raw bytes when None.
        """
        if len(urls) != len(files):
            raise ValueError("urls and files must have the same length")
        if not files:
            return

        reader = reader or RawContentReader()
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def fetch_one(url: str, file: File) -> None:
            async with semaphore:
                file.data = await reader.read(self, url)

        tasks = [asyncio.create_task(fetch_one(u, f)) for u, f in zip(urls, files)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        logger.debug(f"Fetched {len(files)} file(s)")

    @staticmethod
    def _decode(url: str, body: bytes) -> Any:
        try:
            return json.loads(body)
        except ValueError as e:
            raise RemoteError(_host(url), f"malformed JSON from {url}: {e}") from e
