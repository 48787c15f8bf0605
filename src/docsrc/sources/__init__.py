"""Import path resolution and directory fetching.

Quick Start
-----------
Validate, resolve and fetch an import path:

    from docsrc.sources import HTTPHelper, create_http_client, get_directory

    async with create_http_client() as client:
        directory = await get_directory(HTTPHelper(client), "gitlab.com/acme/widgets")
        for file in directory.files:
            print(file.name, len(file.data))

Pass the returned ``etag`` back on the next call; an unchanged directory
raises ``NotModifiedError`` instead of being fetched again.

Supported Hosts
---------------
- ``gitlab.com/{namespace}/{project}[/dir]``: GitLabFetcher (REST API)
- ``{scope}.googlesource.com/...``: GitilesFetcher (raw tree, HTML text)

Custom Services
---------------
Implement DirectoryFetcher (and optionally ProjectFetcher) and register it.
Registration order is priority order:

    registry = create_default_registry()
    registry.add_service(Service(pattern=re.compile(r"^git\\.example\\.com/(?P<repo>.+)$"),
                                 prefix="git.example.com/", fetcher=MyFetcher()))
"""

from .base import (
    DirectoryFetcher,
    ProjectFetcher,
    check_etag,
    classify_status,
    expand,
    is_doc_file,
)
from .content import (
    ContentReader,
    GitilesHTMLReader,
    RawContentReader,
    extract_gitiles_text,
)
from .fetch import get_directory, get_project
from .gitiles import GitilesFetcher
from .gitlab import GitLabFetcher
from .http import HTTPHelper, create_http_client
from .path import is_go_repo_path, is_valid_path, is_valid_remote_path
from .registry import (
    Service,
    ServiceRegistry,
    create_default_registry,
    get_default_registry,
)

__all__ = [
    # Validation
    "is_valid_remote_path",
    "is_valid_path",
    "is_go_repo_path",
    # HTTP
    "HTTPHelper",
    "create_http_client",
    # Content
    "ContentReader",
    "RawContentReader",
    "GitilesHTMLReader",
    "extract_gitiles_text",
    # Fetchers
    "DirectoryFetcher",
    "ProjectFetcher",
    "GitLabFetcher",
    "GitilesFetcher",
    "is_doc_file",
    "classify_status",
    "check_etag",
    "expand",
    # Registry
    "Service",
    "ServiceRegistry",
    "create_default_registry",
    "get_default_registry",
    # Entry points
    "get_directory",
    "get_project",
]
