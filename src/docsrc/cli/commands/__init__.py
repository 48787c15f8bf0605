"""Command implementations for docsrc CLI."""

from .check import describe_path, handle_check
from .fetch import add_fetch_arguments, handle_fetch, handle_project

__all__ = [
    "handle_check",
    "describe_path",
    "handle_fetch",
    "handle_project",
    "add_fetch_arguments",
]
