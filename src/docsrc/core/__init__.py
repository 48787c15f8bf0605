"""Core types, configuration and errors for docsrc."""

from .config import Config, FetchConfig
from .exceptions import (
    ConfigError,
    DocsrcError,
    InvalidImportPathError,
    NotFoundError,
    NotModifiedError,
    NotRepositoryRootError,
    RemoteError,
    UnsupportedHostError,
)
from .types import Directory, DirectoryStatus, File, Project

__all__ = [
    "Config",
    "FetchConfig",
    "DocsrcError",
    "ConfigError",
    "InvalidImportPathError",
    "UnsupportedHostError",
    "NotFoundError",
    "NotModifiedError",
    "RemoteError",
    "NotRepositoryRootError",
    "Directory",
    "DirectoryStatus",
    "File",
    "Project",
]
