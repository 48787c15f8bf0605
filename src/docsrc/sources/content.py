"""File content readers.

Backends hand a reader to ``HTTPHelper.get_files``. Most providers expose
raw blobs and use RawContentReader. Gitiles only renders file contents as
HTML, so GitilesHTMLReader scrapes the text back out of the page. That
scraper depends on Gitiles' markup and is kept here so it can be replaced
without touching the fetcher.
"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from ..core.exceptions import RemoteError

if TYPE_CHECKING:
    from .http import HTTPHelper


@runtime_checkable
class ContentReader(Protocol):
    """Reads the content of one file."""

    async def read(self, http: "HTTPHelper", url: str) -> bytes:
        """Return the raw bytes of the file at ``url``."""
        ...


class RawContentReader:
    """Reads endpoints that serve the file bytes directly."""

    async def read(self, http: "HTTPHelper", url: str) -> bytes:
        return await http.get_bytes(url)


_LIST_START = '<ol class="prettyprint">'
_LIST_END = "</ol>"
_TAG = re.compile(r"<[^>]+>")


def extract_gitiles_text(page: bytes, host: str = "gitiles") -> bytes:
    """Extract file text from a Gitiles source listing page.

    Args:
        page: Rendered HTML page.
        host: Host name used in error messages.

    Returns:
        The file text, one listing line per output line.

    Raises:
        RemoteError: If the page does not contain the expected listing.
    """
    s = page.decode("utf-8", errors="replace")
    i = s.find(_LIST_START)
    if i == -1:
        raise RemoteError(host, "unexpected gitiles format")
    s = s[i + len(_LIST_START):]
    i = s.find(_LIST_END)
    if i == -1:
        raise RemoteError(host, "unexpected gitiles format")
    s = s[:i]

    s = s.replace("</li>", "\n")
    s = _TAG.sub("", s)
    return html.unescape(s).encode("utf-8")


class GitilesHTMLReader:
    """Reads file text out of Gitiles' HTML source view."""

    async def read(self, http: "HTTPHelper", url: str) -> bytes:
        page = await http.get_bytes(url)
        return extract_gitiles_text(page, httpx.URL(url).host)
