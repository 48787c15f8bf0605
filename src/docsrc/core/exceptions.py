"""Custom exceptions for docsrc."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import DirectoryStatus


class DocsrcError(Exception):
    """Base exception for all docsrc errors."""

    pass


class ConfigError(DocsrcError):
    """Configuration could not be loaded."""

    pass


class InvalidImportPathError(DocsrcError):
    """Import path is structurally invalid."""

    def __init__(self, import_path: str):
        self.import_path = import_path
        super().__init__(f"Import path not valid: {import_path!r}")


class UnsupportedHostError(DocsrcError):
    """No registered service handles the import path."""

    def __init__(self, import_path: str):
        self.import_path = import_path
        host = import_path.split("/", 1)[0]
        super().__init__(f"Unsupported host {host!r} for import path {import_path!r}")


class NotFoundError(DocsrcError):
    """The directory no longer exists or was moved upstream."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotModifiedError(DocsrcError):
    """Content is unchanged relative to the caller's fingerprint.

    Not a failure. Callers reuse what they already have and may use
    ``since`` and ``status`` to update their bookkeeping.
    """

    def __init__(self, since: datetime, status: "DirectoryStatus"):
        self.since = since
        self.status = status
        super().__init__(f"Package not modified since {since.isoformat()}")


class RemoteError(DocsrcError):
    """Transient failure talking to a provider (network, status, decoding)."""

    def __init__(self, host: str, message: str):
        self.host = host
        self.message = message
        super().__init__(f"{host}: {message}")


class NotRepositoryRootError(DocsrcError):
    """A candidate base URL is not the root of a repository."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Not a repository root: {url}")
