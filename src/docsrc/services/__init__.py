"""Service layer for docsrc."""

from .documentation import (
    PACKAGE_VERSION,
    DocumentationService,
    Package,
    PackageBuilder,
    strip_version_prefix,
)

__all__ = [
    "PACKAGE_VERSION",
    "DocumentationService",
    "Package",
    "PackageBuilder",
    "strip_version_prefix",
]
