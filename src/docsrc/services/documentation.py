"""Documentation service: the inbound fetch contract.

Callers persist the fingerprint of each package they store. Stored
fingerprints carry a version prefix, ``<PACKAGE_VERSION>-<directory etag>``,
so bumping PACKAGE_VERSION forces every package to be rebuilt even when its
upstream revision is unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from ..core.types import Directory, DirectoryStatus
from ..sources.fetch import get_directory
from ..sources.http import HTTPHelper
from ..sources.registry import ServiceRegistry

PACKAGE_VERSION = "1"


def strip_version_prefix(etag: str) -> str:
    """Return the directory etag inside a stored fingerprint.

    A missing or mismatched version prefix yields "", meaning no prior
    fingerprint.
    """
    prefix = PACKAGE_VERSION + "-"
    if etag.startswith(prefix):
        return etag[len(prefix):]
    return ""


@dataclass
class Package:
    """Fetched package, ready for documentation extraction.

    Attributes:
        import_path: Import path of the package.
        etag: Version-prefixed fingerprint to persist.
        directory: The fetched directory, including file contents.
        project_name: Project name reported by the provider.
        project_root: Import path of the repository root.
        project_url: Web URL of the project.
        browse_url: Web URL of the package directory.
        status: Freshness classification.
        stars: Popularity signal.
        subdirectories: Names of subdirectories.
    """

    import_path: str
    etag: str
    directory: Directory
    project_name: str = ""
    project_root: str = ""
    project_url: str = ""
    browse_url: str = ""
    status: DirectoryStatus = DirectoryStatus.ACTIVE
    stars: int = 0
    subdirectories: list[str] = field(default_factory=list)

    @classmethod
    def from_directory(cls, directory: Directory) -> "Package":
        return cls(
            import_path=directory.import_path,
            etag=f"{PACKAGE_VERSION}-{directory.etag}",
            directory=directory,
            project_name=directory.project_name,
            project_root=directory.project_root,
            project_url=directory.project_url,
            browse_url=directory.browse_url,
            status=directory.status,
            stars=directory.stars,
            subdirectories=list(directory.subdirectories),
        )


PackageBuilder = Callable[[Directory], Package]


class DocumentationService:
    """Fetches packages for the documentation layer.

    Example:
        service = DocumentationService(HTTPHelper(client))
        package = await service.get("gitlab.com/acme/widgets", stored_etag)
    """

    def __init__(
        self,
        http: HTTPHelper,
        registry: ServiceRegistry | None = None,
        builder: PackageBuilder | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            http: Request helper.
            registry: Service registry. Defaults to the built-in services.
            builder: Turns a fetched directory into a Package. Documentation
                extraction plugs in here.
        """
        self._http = http
        self._registry = registry
        self._builder = builder or Package.from_directory

    async def get(self, import_path: str, etag: str = "", timeout: float | None = None) -> Package:
        """Fetch a package unless its stored fingerprint is current.

        Args:
            import_path: Import path of the package.
            etag: Fingerprint persisted from the previous fetch.
            timeout: Deadline in seconds for the fetch.

        Returns:
            Package whose etag carries the current version prefix.

        Raises:
            NotModifiedError: If the package is unchanged.
            NotFoundError: If the package was removed upstream.
        """
        directory = await get_directory(
            self._http,
            import_path,
            strip_version_prefix(etag),
            registry=self._registry,
            timeout=timeout,
        )
        if not directory.import_path:
            directory.import_path = import_path

        package = self._builder(directory)
        expected = f"{PACKAGE_VERSION}-{directory.etag}"
        if package.etag != expected:
            logger.warning(f"Builder returned etag {package.etag!r} for {import_path}, using {expected!r}")
            package.etag = expected
        return package
