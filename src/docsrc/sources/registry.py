"""Service registry for import path routing.

This module provides an ordered registry that binds import path patterns to
backend fetchers, allowing the system to resolve any import path to the
hosting provider that serves it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from ..core.exceptions import NotFoundError, UnsupportedHostError
from .base import DirectoryFetcher, ProjectFetcher

if TYPE_CHECKING:
    from ..core.config import Config


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class Service:
    """A backend bound to the import paths it serves.

    Attributes:
        pattern: Regex over the full import path; named groups become the
            match passed to the fetcher.
        fetcher: Backend implementation.
        prefix: Literal prefix tested before the pattern. Empty matches all.
        name: Label used in logs.
    """

    pattern: re.Pattern[str]
    fetcher: DirectoryFetcher
    prefix: str = ""
    name: str = field(default="")

    @property
    def supports_project(self) -> bool:
        """Whether the backend can fetch project metadata."""
        return isinstance(self.fetcher, ProjectFetcher)


# =============================================================================
# Registry Implementation
# =============================================================================


class ServiceRegistry:
    """Ordered registry of services.

    Registration order is priority order: resolution returns the first
    registered service whose prefix and pattern both match. Services are
    registered once at startup; the registry is only read afterwards.

    Example:
        registry = ServiceRegistry()
        registry.add_service(Service(pattern=GITLAB_PATTERN, prefix="gitlab.com/",
                                     fetcher=GitLabFetcher()))

        service, match = registry.resolve("gitlab.com/acme/widgets/sub")
        directory = await service.fetcher.fetch_directory(http, match, "")
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._services: list[Service] = []

    def add_service(self, service: Service) -> None:
        """Append a service. Not safe to call concurrently with resolve."""
        self._services.append(service)

    def services(self) -> list[Service]:
        """Registered services in priority order."""
        return list(self._services)

    def resolve(self, import_path: str) -> tuple[Service, dict[str, str]]:
        """Find the service for an import path.

        Args:
            import_path: Validated import path.

        Returns:
            Tuple of the service and a fresh match dict holding its named
            groups and ``importPath``.

        Raises:
            NotFoundError: If a service's non-empty prefix matches but its
                pattern does not.
            UnsupportedHostError: If no service matches.
        """
        for service in self._services:
            if not import_path.startswith(service.prefix):
                continue
            m = service.pattern.match(import_path)
            if m is None:
                if service.prefix:
                    raise NotFoundError(
                        "Import path prefix matches known service, but regexp does not."
                    )
                continue

            match = {"importPath": import_path}
            match.update({k: v for k, v in m.groupdict().items() if v is not None})
            logger.debug(f"Resolved {import_path} to service {service.name or service.prefix}")
            return service, match

        raise UnsupportedHostError(import_path)


# =============================================================================
# Default Registry
# =============================================================================

_default_registry: ServiceRegistry | None = None


def create_default_registry(config: Config | None = None) -> ServiceRegistry:
    """Create a registry with the built-in backends.

    GitLab is registered before Gitiles; Gitiles' empty prefix would
    otherwise be tested first for every path.
    """
    # Import here to avoid circular imports
    from .gitiles import GITILES_PATTERN, GitilesFetcher
    from .gitlab import GITLAB_PATTERN, GITLAB_PREFIX, GitLabFetcher

    expires_after = config.fetch.expires_after if config else None

    registry = ServiceRegistry()
    registry.add_service(
        Service(
            pattern=GITLAB_PATTERN,
            prefix=GITLAB_PREFIX,
            fetcher=GitLabFetcher(expires_after=expires_after),
            name="gitlab",
        )
    )
    registry.add_service(
        Service(
            pattern=GITILES_PATTERN,
            fetcher=GitilesFetcher(expires_after=expires_after),
            name="gitiles",
        )
    )
    return registry


def get_default_registry() -> ServiceRegistry:
    """Get the default global registry, built on first access."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry
