"""Fetcher protocols and helpers shared by all backends.

A backend implements DirectoryFetcher and, when the provider exposes project
metadata, ProjectFetcher. Both receive the match groups produced by the
service registry; fetchers may add derived keys to them (e.g. the resolved
branch) before expanding URL templates.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..core.exceptions import NotModifiedError
from ..core.types import Directory, DirectoryStatus, Project

if TYPE_CHECKING:
    from .http import HTTPHelper


# =============================================================================
# Protocols
# =============================================================================


@runtime_checkable
class DirectoryFetcher(Protocol):
    """Fetches one directory of a hosted repository."""

    async def fetch_directory(
        self,
        http: "HTTPHelper",
        match: dict[str, str],
        saved_etag: str,
    ) -> Directory:
        """Fetch the directory identified by ``match``.

        Args:
            http: Request helper.
            match: Named groups from the registry match, plus ``importPath``.
            saved_etag: Fingerprint from the previous fetch, or "".

        Returns:
            The directory at the current revision.

        Raises:
            NotModifiedError: If the current fingerprint equals saved_etag.
            NotFoundError: If the path no longer resolves upstream.
            RemoteError: On transient provider failures.
        """
        ...


@runtime_checkable
class ProjectFetcher(Protocol):
    """Fetches summary metadata for a project."""

    async def fetch_project(self, http: "HTTPHelper", match: dict[str, str]) -> Project:
        ...


# =============================================================================
# Helpers
# =============================================================================

EXPIRES_AFTER = timedelta(days=2 * 365)

_README = re.compile(r"^readme(?:$|\.)", re.IGNORECASE)
_PLACEHOLDER = re.compile(r"\{([^}]*)\}")


def is_doc_file(name: str) -> bool:
    """Return True if a file is relevant for documentation."""
    if name.endswith(".go") and name[0] not in "_.":
        return True
    return _README.match(name) is not None


def classify_status(
    last_committed: datetime,
    expires_after: timedelta = EXPIRES_AFTER,
    now: datetime | None = None,
) -> DirectoryStatus:
    """Classify freshness from the time of the most recent commit."""
    now = now or datetime.now(timezone.utc)
    if last_committed.tzinfo is None:
        last_committed = last_committed.replace(tzinfo=timezone.utc)
    if last_committed + expires_after < now:
        return DirectoryStatus.NO_RECENT_COMMITS
    return DirectoryStatus.ACTIVE


def check_etag(
    tag: str,
    revision: str,
    saved_etag: str,
    since: datetime,
    status: DirectoryStatus,
) -> str:
    """Build the fingerprint for a revision and compare it to saved_etag.

    Returns:
        The new fingerprint, ``<tag>-<revision>``.

    Raises:
        NotModifiedError: If it equals saved_etag.
    """
    etag = f"{tag}-{revision}"
    if etag == saved_etag:
        raise NotModifiedError(since=since, status=status)
    return etag


def expand(template: str, match: dict[str, str], *subs: str) -> str:
    """Expand ``{name}`` placeholders from match and ``{0}``, ``{1}``... from subs.

    Example:
        expand("https://gitlab.com/{namespace}/{project}/blob/{ref}/{0}", match, "doc.go")
    """

    def replace(m: re.Match[str]) -> str:
        key = m.group(1)
        if key in match:
            return match[key]
        try:
            return subs[int(key)]
        except (ValueError, IndexError):
            raise KeyError(f"no value for placeholder {{{key}}}") from None

    return _PLACEHOLDER.sub(replace, template)
