"""Fetch and project commands for docsrc CLI."""

import argparse
import asyncio

from ...core.config import Config
from ...core.exceptions import NotModifiedError
from ...core.types import Directory
from ...services import DocumentationService
from ...sources import HTTPHelper, create_default_registry, create_http_client, get_project


def add_fetch_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the fetch command.

    Args:
        parser: Subcommand parser to extend.
    """
    parser.add_argument("path", help="Import path")
    parser.add_argument(
        "--etag",
        default="",
        help="Fingerprint from a previous fetch; unchanged packages are not fetched",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Deadline in seconds for the whole fetch",
    )


def handle_fetch(args, config: Config) -> None:
    """Handle fetch command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    asyncio.run(_handle_fetch_async(args, config))


async def _handle_fetch_async(args, config: Config) -> None:
    async with create_http_client(config) as client:
        service = DocumentationService(
            HTTPHelper.from_config(client, config),
            registry=create_default_registry(config),
        )
        try:
            package = await service.get(args.path, args.etag, timeout=args.timeout)
        except NotModifiedError as e:
            print(f"Not modified since {e.since.isoformat()} ({e.status.value})")
            return

    print(f"Etag: {package.etag}")
    _print_directory(package.directory)


def handle_project(args, config: Config) -> None:
    """Handle project command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    asyncio.run(_handle_project_async(args, config))


async def _handle_project_async(args, config: Config) -> None:
    async with create_http_client(config) as client:
        project = await get_project(
            HTTPHelper.from_config(client, config),
            args.path,
            registry=create_default_registry(config),
        )
    print(project.description or "(no description)")


def _print_directory(directory: Directory) -> None:
    """Print a fetched directory.

    Args:
        directory: Directory to display.
    """
    print(f"Import path: {directory.import_path}")
    print(f"Project: {directory.project_name} ({directory.project_url})")
    print(f"Root: {directory.project_root}")
    print(f"Browse: {directory.browse_url}")
    print(f"Status: {directory.status.value}")
    print(f"Stars: {directory.stars}")
    print()

    if directory.files:
        print("Files:")
        for file in directory.files:
            print(f"  • {file.name} ({len(file.data)} bytes)")
    else:
        print("No documentation files.")

    if directory.subdirectories:
        print("Subdirectories:")
        for name in directory.subdirectories:
            print(f"  • {name}")
