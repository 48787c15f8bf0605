"""Gitiles backend.

Serves ``{scope}.googlesource.com/...`` import paths. Gitiles has no
project metadata API and does not say where a repository ends and a
directory path begins, so the fetcher walks up the path until the ref
listing answers. File text is only available as rendered HTML and is read
through GitilesHTMLReader.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

from ..core.exceptions import NotFoundError, NotRepositoryRootError, RemoteError
from ..core.types import Directory, File
from .base import EXPIRES_AFTER, check_etag, classify_status, is_doc_file
from .content import GitilesHTMLReader

if TYPE_CHECKING:
    from .http import HTTPHelper


GITILES_PATTERN = re.compile(
    r"^(?P<scope>[a-z0-9A-Z_.\-]+)(?P<host>\.googlesource\.com)(?P<rest>(?:/.*)?)$"
)

# Branches tried in order when choosing the revision to document.
_BRANCHES = (
    ("refs/heads/master", "master"),
    ("refs/heads/go1", "go1"),
    ("HEAD", "HEAD"),
)

_TIME_FORMATS = ("%a %b %d %H:%M:%S %Y %z", "%a %b %d %H:%M:%S %Y")


def _parse_time(value: str, host: str) -> datetime:
    for fmt in _TIME_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except (TypeError, ValueError):
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise RemoteError(host, f"bad commit time {value!r}")


class GitilesFetcher:
    """Directory fetcher for Gitiles hosts."""

    tag = "gitiles"

    def __init__(self, expires_after: timedelta | None = None) -> None:
        self.expires_after = expires_after or EXPIRES_AFTER
        self.reader = GitilesHTMLReader()

    async def fetch_directory(
        self,
        http: "HTTPHelper",
        match: dict[str, str],
        saved_etag: str,
    ) -> Directory:
        host = match["scope"] + match["host"]
        repo_path = httpx.URL("https://" + host + match.get("rest", "")).path.rstrip("/")

        base, repo_path, rel, refs = await self._find_root(http, host, repo_path)
        match["rel"] = rel

        branch, head = self._select_branch(refs, base)
        match["ref"] = branch
        rel_dir = rel + "/" if rel else ""

        # Most recent commit touching the directory
        log_url = f"{base}/+log/{branch}" + (f"/{rel}" if rel else "") + "?format=JSON&n=1"
        _, log = await http.get_non_executable_json(log_url)
        entries = log.get("log") if isinstance(log, dict) else None
        if not entries:
            raise NotFoundError("package directory changed or removed")

        try:
            revision = str(entries[0]["commit"])
            committed = entries[0]["committer"]["time"]
        except (KeyError, TypeError) as e:
            raise RemoteError(host, f"unexpected log entry: {e!r}") from e

        last_committed = _parse_time(committed, host)
        status = classify_status(last_committed, self.expires_after)
        etag = check_etag(self.tag, revision, saved_etag, last_committed, status)

        # Gitiles tree listings are not paged.
        _, tree = await http.get_non_executable_json(f"{base}/+/{branch}/{rel_dir}?format=JSON")
        if not isinstance(tree, dict):
            raise RemoteError(host, f"unexpected tree response for {base}")

        files: list[File] = []
        data_urls: list[str] = []
        subdirs: list[str] = []
        tree_entries = tree.get("entries") or []
        if not isinstance(tree_entries, list) or not all(isinstance(e, dict) for e in tree_entries):
            raise RemoteError(host, f"unexpected tree entries for {base}")
        for entry in tree_entries:
            name = entry.get("name") or ""
            if entry.get("type") == "tree":
                subdirs.append(name)
            elif entry.get("type") == "blob" and is_doc_file(name):
                files.append(File(name=name, browse_url=f"{base}/+/{branch}/{rel_dir}{name}"))
                data_urls.append(f"{base}/+/{head}/{rel_dir}{name}")

        await http.get_files(data_urls, files, reader=self.reader)

        import_path = host + repo_path + (f"/{rel}" if rel else "")
        logger.info(f"Fetched {import_path} at {etag}: {len(files)} file(s)")
        return Directory(
            browse_url=f"{base}/+/{branch}/{rel_dir}",
            etag=etag,
            files=files,
            subdirectories=subdirs,
            line_fmt="%s#%d",
            import_path=import_path,
            project_name=repo_path.lstrip("/"),
            project_root=host + repo_path,
            project_url=f"{base}/{rel_dir}",
            vcs="git",
            status=status,
        )

    async def _find_root(
        self,
        http: "HTTPHelper",
        host: str,
        repo_path: str,
    ) -> tuple[str, str, str, dict[str, Any]]:
        """Walk up the path until a repository root answers.

        Returns:
            Tuple of base URL, repository path, path relative to the
            repository root, and the decoded ref listing.
        """
        rel = ""
        while repo_path:
            base = f"https://{host}{repo_path}"
            try:
                refs = await self._list_refs(http, base)
                return base, repo_path, rel, refs
            except NotRepositoryRootError:
                head, _, tail = repo_path.rpartition("/")
                rel = f"{tail}/{rel}" if rel else tail
                repo_path = head
                logger.debug(f"{base} is not a repository root, trying {host}{repo_path}")

        raise NotFoundError(f"No repository found for {host}/{rel}")

    async def _list_refs(self, http: "HTTPHelper", base: str) -> dict[str, Any]:
        try:
            _, refs = await http.get_non_executable_json(f"{base}/+refs?format=JSON")
        except NotFoundError as e:
            raise NotRepositoryRootError(base) from e
        if not isinstance(refs, dict):
            raise RemoteError(httpx.URL(base).host, f"unexpected refs response for {base}")
        return refs

    @staticmethod
    def _select_branch(refs: dict[str, Any], base: str) -> tuple[str, str]:
        for ref, branch in _BRANCHES:
            if ref in refs:
                try:
                    return branch, str(refs[ref]["value"])
                except (KeyError, TypeError) as e:
                    raise RemoteError(
                        httpx.URL(base).host, f"unexpected ref {ref} in {base}: {e!r}"
                    ) from e
        raise NotFoundError(f"Failed to find master, go1 or HEAD in {base}")
