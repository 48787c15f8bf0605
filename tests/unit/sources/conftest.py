"""Fixtures and response builders for source tests."""

import json
from datetime import datetime, timedelta, timezone

import respx

GITLAB_API = "https://gitlab.com/api/v4"
PROJECT_URL = f"{GITLAB_API}/projects/acme%2Fwidgets"
COMMITS_URL = f"{GITLAB_API}/projects/42/repository/commits"
TREE_URL = f"{GITLAB_API}/projects/42/repository/tree"


def fresh_time() -> datetime:
    """A commit time well inside the staleness window."""
    return datetime.now(timezone.utc) - timedelta(days=3)


def stale_time() -> datetime:
    """A commit time outside the default two year window."""
    return datetime.now(timezone.utc) - timedelta(days=3 * 365)


def make_project(default_branch: str = "main", description: str = "Widgets for all") -> dict:
    """Build a GitLab project response."""
    return {
        "id": 42,
        "name": "widgets",
        "description": description,
        "default_branch": default_branch,
        "star_count": 7,
        "web_url": "https://gitlab.com/acme/widgets",
    }


def make_commits(commit_id: str = "abc123", committed: datetime | None = None) -> list[dict]:
    """Build a GitLab commit list with one entry."""
    committed = committed or fresh_time()
    return [{"id": commit_id, "committed_date": committed.isoformat()}]


def blob(name: str, sha: str, directory: str = "sub") -> dict:
    """Build a GitLab tree blob entry."""
    path = f"{directory}/{name}" if directory else name
    return {"id": sha, "name": name, "type": "blob", "path": path}


def tree(name: str, directory: str = "sub") -> dict:
    """Build a GitLab tree subdirectory entry."""
    return {"id": f"tree-{name}", "name": name, "type": "tree", "path": f"{directory}/{name}"}


def mock_gitlab(
    commit_id: str = "abc123",
    committed: datetime | None = None,
    pages: list[list[dict]] | None = None,
    total_pages_header: bool = True,
    blobs: dict[str, bytes] | None = None,
    default_branch: str = "main",
) -> dict[str, respx.Route]:
    """Register routes for the acme/widgets project on the active respx router.

    Returns:
        Routes by name, for call assertions.
    """
    if pages is None:
        pages = [[blob("doc.go", "sha-doc"), blob("image.png", "sha-png"), tree("internal")]]
    if blobs is None:
        blobs = {"sha-doc": b"// Package sub does things.\npackage sub\n"}

    routes = {
        "project": respx.get(PROJECT_URL).respond(200, json=make_project(default_branch)),
        "commits": respx.get(COMMITS_URL).respond(200, json=make_commits(commit_id, committed)),
    }
    for number, entries in enumerate(pages, start=1):
        headers = {"X-Total-Pages": str(len(pages))} if total_pages_header else {}
        routes[f"tree{number}"] = respx.get(TREE_URL, params__contains={"page": str(number)}).respond(
            200, json=entries, headers=headers
        )
    for sha, data in blobs.items():
        routes[sha] = respx.get(
            f"{GITLAB_API}/projects/42/repository/blobs/{sha}/raw"
        ).respond(200, content=data)
    return routes


def non_executable(value) -> str:
    """Encode a value the way Gitiles does."""
    return ")]}'\n" + json.dumps(value)


def gitiles_page(lines: list[str]) -> str:
    """Render file lines as a Gitiles source listing page."""
    items = "".join(f'<li class="L1"><span class="pln">{line}</span></li>' for line in lines)
    return f'<html><body><ol class="prettyprint">{items}</ol></body></html>'


def gitiles_time(when: datetime) -> str:
    """Format a commit time the way Gitiles' JSON log does."""
    return when.strftime("%a %b %d %H:%M:%S %Y +0000")
