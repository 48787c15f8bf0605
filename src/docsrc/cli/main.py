"""CLI entry point for docsrc."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="docsrc",
        description="Resolve import paths and fetch their documentation sources",
    )
    parser.add_argument("-v", "--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument(
        "--verbose", action="store_true", help="Log requests and fetch progress"
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    check_parser = subparsers.add_parser("check", help="Validate an import path")
    check_parser.add_argument("path", help="Import path")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch a package directory")
    commands.add_fetch_arguments(fetch_parser)

    project_parser = subparsers.add_parser("project", help="Show project metadata")
    project_parser.add_argument("path", help="Import path")

    return parser


def configure_logging(level: str) -> None:
    """Send log records at ``level`` and above to stderr."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        config = Config.from_env_or_file()
        configure_logging("DEBUG" if args.verbose else config.log_level)

        if args.command == "check":
            commands.handle_check(args, config)
        elif args.command == "fetch":
            commands.handle_fetch(args, config)
        elif args.command == "project":
            commands.handle_project(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
