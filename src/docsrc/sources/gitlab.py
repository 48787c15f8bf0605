"""GitLab backend.

Serves ``gitlab.com/{namespace}/{project}[/dir]`` through the GitLab v4
REST API. The numeric project ID is unknown up front, so the first request
addresses the project by its URL-encoded ``namespace/project`` path; later
requests use the ID it returns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from loguru import logger

from ..core.exceptions import NotFoundError, RemoteError
from ..core.types import Directory, File, Project
from .base import EXPIRES_AFTER, check_etag, classify_status, expand, is_doc_file

if TYPE_CHECKING:
    from .http import HTTPHelper


GITLAB_PREFIX = "gitlab.com/"
GITLAB_PATTERN = re.compile(
    r"^gitlab\.com/(?P<namespace>[a-z0-9A-Z_.\-]+)/(?P<project>[a-z0-9A-Z_.\-]+)"
    r"(?P<dir>/[a-z0-9A-Z_.\-/]*)?$"
)

_API = "https://gitlab.com/api/v4"
_TREE_PAGE_SIZE = 100


@dataclass(frozen=True)
class GitLabProject:
    """Project fields used from ``GET /projects/:id``."""

    id: int
    name: str
    description: str
    default_branch: str
    stars: int
    web_url: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "GitLabProject":
        """Create from a GitLab API response."""
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            default_branch=data.get("default_branch") or "master",
            stars=data.get("star_count") or 0,
            web_url=data.get("web_url") or "",
        )


def _parse_time(value: str, url: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise RemoteError(httpx.URL(url).host, f"bad commit date {value!r}") from e


class GitLabFetcher:
    """Directory and project fetcher for gitlab.com."""

    tag = "git"

    def __init__(self, expires_after: timedelta | None = None) -> None:
        self.expires_after = expires_after or EXPIRES_AFTER

    async def fetch_directory(
        self,
        http: "HTTPHelper",
        match: dict[str, str],
        saved_etag: str,
    ) -> Directory:
        """Fetch a directory of a GitLab project.

        Adds ``ref`` (the default branch), ``project_id`` and a normalized
        ``dir`` to match before building the follow-up URLs.
        """
        project = await self._project(http, match)
        match["ref"] = project.default_branch
        match["project_id"] = str(project.id)
        match["dir"] = match.get("dir", "").strip("/")

        # Most recent commit touching the directory
        url = expand(_API + "/projects/{project_id}/repository/commits", match)
        _, commits = await http.get_json(
            url, params={"path": match["dir"], "ref_name": match["ref"], "per_page": 1}
        )
        if not isinstance(commits, list):
            raise RemoteError(httpx.URL(url).host, f"unexpected commits response from {url}")
        if not commits:
            raise NotFoundError("package directory changed or removed")

        try:
            revision = str(commits[0]["id"])
            committed_date = commits[0].get("committed_date")
        except (KeyError, TypeError, AttributeError) as e:
            raise RemoteError(httpx.URL(url).host, f"unexpected commit entry: {e!r}") from e

        last_committed = _parse_time(committed_date, url)
        status = classify_status(last_committed, self.expires_after)
        etag = check_etag(self.tag, revision, saved_etag, last_committed, status)

        files, data_urls, subdirs = await self._list_tree(http, match)
        await http.get_files(data_urls, files)

        browse_url = project.web_url
        if match["dir"]:
            browse_url = expand(
                "https://gitlab.com/{namespace}/{project}/tree/{0}/{dir}",
                match,
                quote(match["ref"], safe="/"),
            )

        logger.info(
            f"Fetched {match['importPath']} at {etag}: "
            f"{len(files)} file(s), {len(subdirs)} subdirectories"
        )
        return Directory(
            browse_url=browse_url,
            etag=etag,
            files=files,
            subdirectories=subdirs,
            line_fmt="%s#L%d",
            import_path=match["importPath"],
            project_name=project.name,
            project_root=expand("gitlab.com/{namespace}/{project}", match),
            project_url=project.web_url,
            vcs="git",
            status=status,
            stars=project.stars,
        )

    async def fetch_project(self, http: "HTTPHelper", match: dict[str, str]) -> Project:
        """Fetch the project description."""
        project = await self._project(http, match)
        return Project(description=project.description)

    async def _project(self, http: "HTTPHelper", match: dict[str, str]) -> GitLabProject:
        # The API accepts a numeric ID or the URL-encoded full path.
        project_path = quote(f"{match['namespace']}/{match['project']}", safe="")
        url = f"{_API}/projects/{project_path}"
        _, data = await http.get_json(url)
        try:
            return GitLabProject.from_api_response(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(httpx.URL(url).host, f"unexpected project response: {e}") from e

    async def _list_tree(
        self,
        http: "HTTPHelper",
        match: dict[str, str],
    ) -> tuple[list[File], list[str], list[str]]:
        """List the directory, following X-Total-Pages pagination."""
        files: list[File] = []
        data_urls: list[str] = []
        subdirs: list[str] = []

        url = expand(_API + "/projects/{project_id}/repository/tree", match)
        ref = quote(match["ref"], safe="/")

        page = 1
        while True:
            response, entries = await http.get_json(
                url,
                params={
                    "path": match["dir"],
                    "ref": match["ref"],
                    "per_page": _TREE_PAGE_SIZE,
                    "page": page,
                },
            )
            if not isinstance(entries, list):
                raise RemoteError(response.url.host, f"unexpected tree response from {url}")

            for entry in entries:
                if not isinstance(entry, dict):
                    raise RemoteError(response.url.host, f"unexpected tree entry {entry!r}")
                entry_path = entry.get("path") or ""
                name = entry.get("name") or entry_path.rsplit("/", 1)[-1]
                if entry.get("type") == "blob":
                    if not is_doc_file(name):
                        continue
                    if not entry.get("id"):
                        raise RemoteError(response.url.host, f"tree entry {name!r} has no blob id")
                    files.append(
                        File(
                            name=name,
                            browse_url=expand(
                                "https://gitlab.com/{namespace}/{project}/blob/{0}/{1}",
                                match,
                                ref,
                                entry_path,
                            ),
                        )
                    )
                    data_urls.append(
                        expand(
                            _API + "/projects/{project_id}/repository/blobs/{0}/raw",
                            match,
                            str(entry["id"]),
                        )
                    )
                elif entry.get("type") == "tree":
                    subdirs.append(name)

            total = response.headers.get("X-Total-Pages")
            if total is None:
                break
            try:
                pages = int(total)
            except ValueError:
                logger.warning(f"Ignoring unparsable X-Total-Pages {total!r} from {url}")
                break
            if pages <= page:
                break
            logger.debug(f"Tree page {page} of {pages} for {match['importPath']}")
            page += 1

        return files, data_urls, subdirs
