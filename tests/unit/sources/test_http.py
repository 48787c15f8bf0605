"""Tests for HTTPHelper."""

import asyncio

import httpx
import pytest
import respx

from docsrc.core.config import Config
from docsrc.core.exceptions import NotFoundError, RemoteError
from docsrc.core.types import File
from docsrc.sources import HTTPHelper, create_http_client


class TestHTTPHelper:
    """Tests for request helpers."""

    def test_rejects_zero_concurrency(self):
        """max_concurrency must be positive."""
        with pytest.raises(ValueError):
            HTTPHelper(httpx.AsyncClient(), max_concurrency=0)

    def test_from_config_uses_concurrency(self):
        """from_config applies the configured bound."""
        config = Config()
        config.fetch.max_concurrency = 2

        helper = HTTPHelper.from_config(httpx.AsyncClient(), config)

        assert helper.max_concurrency == 2

    def test_create_http_client_sets_user_agent(self):
        """The shared client sends the configured User-Agent."""
        config = Config()
        config.fetch.user_agent = "docsrc-test/0.1"

        client = create_http_client(config)

        assert client.headers["user-agent"] == "docsrc-test/0.1"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_json_decodes_body(self, http):
        """get_json returns the response and decoded value."""
        respx.get("https://example.com/api").respond(
            200, json={"a": 1}, headers={"X-Total-Pages": "3"}
        )

        response, data = await http.get_json("https://example.com/api")

        assert data == {"a": 1}
        assert response.headers["X-Total-Pages"] == "3"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_json_404_raises_not_found(self, http):
        """A 404 is reported as NotFoundError."""
        respx.get("https://example.com/missing").respond(404)

        with pytest.raises(NotFoundError, match="Resource not found"):
            await http.get_json("https://example.com/missing")

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_json_server_error_raises_remote(self, http):
        """Other statuses are transient RemoteErrors."""
        respx.get("https://example.com/api").respond(503)

        with pytest.raises(RemoteError) as exc_info:
            await http.get_json("https://example.com/api")

        assert exc_info.value.host == "example.com"
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_json_malformed_raises_remote(self, http):
        """Malformed JSON is a transient error, not a missing package."""
        respx.get("https://example.com/api").respond(200, text="{not json")

        with pytest.raises(RemoteError, match="malformed JSON"):
            await http.get_json("https://example.com/api")

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_failure_raises_remote(self, http):
        """Connection errors are wrapped in RemoteError."""
        respx.get("https://example.com/api").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(RemoteError, match="request failed"):
            await http.get_bytes("https://example.com/api")

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_non_executable_json_strips_prefix(self, http):
        """The )]}' prefix is removed before decoding."""
        respx.get("https://example.com/refs").respond(200, text=')]}\'\n{"HEAD": {"value": "abc"}}')

        _, data = await http.get_non_executable_json("https://example.com/refs")

        assert data == {"HEAD": {"value": "abc"}}

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_non_executable_json_accepts_plain_json(self, http):
        """Bodies without the prefix decode normally."""
        respx.get("https://example.com/refs").respond(200, json=[1, 2])

        _, data = await http.get_non_executable_json("https://example.com/refs")

        assert data == [1, 2]

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_extra_headers(self):
        """Headers given to the helper are sent with each request."""
        route = respx.get("https://example.com/api").respond(200, json={})
        helper = HTTPHelper(httpx.AsyncClient(), headers={"Accept": "application/json"})

        await helper.get_json("https://example.com/api")

        assert route.calls.last.request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_json_encodes_params(self, http):
        """Query values with reserved characters are sent intact."""
        route = respx.get("https://example.com/api").respond(200, json=[])

        await http.get_json("https://example.com/api", params={"ref": "a+b#c&d", "page": 2})

        params = route.calls.last.request.url.params
        assert params["ref"] == "a+b#c&d"
        assert params["page"] == "2"


class TestGetFiles:
    """Tests for batch content fetching."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_populates_files_in_order(self, http):
        """Each URL's body lands in the matching file."""
        respx.get("https://example.com/a").respond(200, content=b"alpha")
        respx.get("https://example.com/b").respond(200, content=b"beta")
        files = [File(name="a.go", browse_url=""), File(name="b.go", browse_url="")]

        await http.get_files(["https://example.com/a", "https://example.com/b"], files)

        assert [f.data for f in files] == [b"alpha", b"beta"]

    @pytest.mark.asyncio
    async def test_empty_batch_is_noop(self, http):
        """No URLs means no requests."""
        await http.get_files([], [])

    @pytest.mark.asyncio
    async def test_length_mismatch_raises(self, http):
        """urls and files must be parallel."""
        with pytest.raises(ValueError):
            await http.get_files(["https://example.com/a"], [])

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_failure_fails_batch(self, http):
        """One failing file fails the whole batch."""
        respx.get("https://example.com/a").respond(200, content=b"alpha")
        respx.get("https://example.com/b").respond(500)
        files = [File(name="a.go", browse_url=""), File(name="b.go", browse_url="")]

        with pytest.raises(RemoteError, match="500"):
            await http.get_files(["https://example.com/a", "https://example.com/b"], files)

    @pytest.mark.asyncio
    async def test_failure_cancels_outstanding_fetches(self, http):
        """Slow fetches are cancelled once another fetch fails."""
        cancelled = []

        class Reader:
            async def read(self, helper, url):
                if url.endswith("fail"):
                    raise RemoteError("example.com", "boom")
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    cancelled.append(url)
                    raise
                return b""

        files = [File(name=n, browse_url="") for n in ("slow", "fail")]

        with pytest.raises(RemoteError, match="boom"):
            await asyncio.wait_for(
                http.get_files(
                    ["https://example.com/slow", "https://example.com/fail"],
                    files,
                    reader=Reader(),
                ),
                timeout=5,
            )

        assert cancelled == ["https://example.com/slow"]

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        """No more than max_concurrency reads run at once."""
        helper = HTTPHelper(httpx.AsyncClient(), max_concurrency=2)
        active = 0
        peak = 0

        class Reader:
            async def read(self, _, url):
                nonlocal active, peak
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1
                return url.encode()

        files = [File(name=str(i), browse_url="") for i in range(6)]
        urls = [f"https://example.com/{i}" for i in range(6)]

        await helper.get_files(urls, files, reader=Reader())

        assert peak == 2
        assert files[5].data == b"https://example.com/5"
