"""Entry points: validate, resolve and fetch an import path."""

from __future__ import annotations

import asyncio

from loguru import logger

from ..core.exceptions import InvalidImportPathError, NotFoundError, NotModifiedError
from ..core.types import Directory, Project
from .http import HTTPHelper
from .path import is_valid_remote_path
from .registry import ServiceRegistry, get_default_registry


async def get_directory(
    http: HTTPHelper,
    import_path: str,
    saved_etag: str = "",
    *,
    registry: ServiceRegistry | None = None,
    timeout: float | None = None,
) -> Directory:
    """Fetch the documentation-relevant contents of an import path.

    Args:
        http: Request helper.
        import_path: Import path to fetch, e.g. ``gitlab.com/acme/widgets/sub``.
        saved_etag: Fingerprint returned by the previous fetch, or "".
        registry: Service registry. Defaults to the built-in services.
        timeout: Deadline in seconds for the whole fetch.

    Returns:
        The directory at its current revision.

    Raises:
        InvalidImportPathError: If the path is structurally invalid.
        UnsupportedHostError: If no service handles the path.
        NotModifiedError: If nothing changed since saved_etag.
        NotFoundError: If the path no longer resolves upstream.
        RemoteError: On transient provider failures.
        TimeoutError: If the deadline passes.
    """
    if not is_valid_remote_path(import_path):
        raise InvalidImportPathError(import_path)

    registry = registry or get_default_registry()
    service, match = registry.resolve(import_path)

    fetch = service.fetcher.fetch_directory(http, match, saved_etag)
    try:
        if timeout is None:
            return await fetch
        return await asyncio.wait_for(fetch, timeout)
    except NotModifiedError as e:
        logger.debug(f"{import_path} not modified since {e.since.isoformat()}")
        raise
    except NotFoundError as e:
        logger.info(f"{import_path} not found: {e.message}")
        raise


async def get_project(
    http: HTTPHelper,
    import_path: str,
    *,
    registry: ServiceRegistry | None = None,
) -> Project:
    """Fetch summary metadata for the project serving an import path.

    Raises:
        InvalidImportPathError: If the path is structurally invalid.
        UnsupportedHostError: If no service handles the path.
        NotFoundError: If the service has no project metadata, or the
            project does not exist.
    """
    if not is_valid_remote_path(import_path):
        raise InvalidImportPathError(import_path)

    registry = registry or get_default_registry()
    service, match = registry.resolve(import_path)
    if not service.supports_project:
        raise NotFoundError(f"Project metadata not available for {import_path}")
    return await service.fetcher.fetch_project(http, match)  # type: ignore[attr-defined]
