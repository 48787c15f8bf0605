"""Type definitions for docsrc."""

from dataclasses import dataclass, field
from enum import Enum


class DirectoryStatus(Enum):
    """Freshness classification of a fetched directory."""

    ACTIVE = "active"
    NO_RECENT_COMMITS = "no_recent_commits"


@dataclass
class File:
    """A documentation-relevant file in a directory.

    Attributes:
        name: Base name of the file.
        browse_url: Web URL for viewing the file.
        data: Raw file content. Filled by the batch content fetch when the
            backend does not read it while listing.
    """

    name: str
    browse_url: str
    data: bytes = b""


@dataclass
class Directory:
    """The uniform result of a successful directory fetch.

    Attributes:
        browse_url: Web URL for the directory.
        etag: Backend-prefixed revision fingerprint.
        files: Documentation-relevant files, in listing order.
        subdirectories: Names of subdirectories, in listing order.
        line_fmt: printf-style template taking a file URL and a line number.
        import_path: Import path of the directory.
        project_name: Human readable project name.
        project_root: Import path of the repository root.
        project_url: Web URL of the project.
        vcs: Version control kind (e.g. "git").
        status: Freshness classification.
        stars: Popularity signal reported by the provider, 0 if unknown.
    """

    browse_url: str
    etag: str
    line_fmt: str
    project_root: str
    project_url: str
    vcs: str
    files: list[File] = field(default_factory=list)
    subdirectories: list[str] = field(default_factory=list)
    import_path: str = ""
    project_name: str = ""
    status: DirectoryStatus = DirectoryStatus.ACTIVE
    stars: int = 0

    def line_url(self, url: str, line: int) -> str:
        """Deep link to ``line`` of the file at ``url``."""
        return self.line_fmt % (url, line)


@dataclass(frozen=True)
class Project:
    """Summary metadata about a project."""

    description: str = ""
