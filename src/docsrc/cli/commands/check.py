"""Check command for docsrc CLI."""

from ...core.config import Config
from ...sources import is_go_repo_path, is_valid_path, is_valid_remote_path


def describe_path(path: str) -> str:
    """Classify an import path for display."""
    if is_valid_remote_path(path):
        return "valid remote"
    if is_go_repo_path(path):
        return "standard package" if is_valid_path(path) else "standard directory"
    return "invalid"


def handle_check(args, config: Config) -> None:
    """Handle check command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    print(f"{args.path}: {describe_path(args.path)}")
