"""Structural validation of import paths.

All functions here are pure predicates: no network access, no side effects.
"""

from __future__ import annotations

import re

from .path_data import GO_REPO_PATH, PACKAGE_PATH, PATH_FLAGS, VALID_TLDS

_VALID_HOST = re.compile(r"^[-a-z0-9]+(?:\.[-a-z0-9]+)+$")

_DIGITS = "0123456789"
_LEADING_PUNCTUATION = "-~+_"
_TRAILING_PUNCTUATION = "-_."


def _is_valid_path_element(element: str) -> bool:
    """Check one path segment.

    Letters (any script), digits and a restricted set of punctuation. ``~``
    and ``+`` are only allowed as the first character, ``.`` never is.
    """
    if not element:
        return False
    first = element[0]
    if not (first.isalpha() or first in _DIGITS or first in _LEADING_PUNCTUATION):
        return False
    return all(
        c.isalpha() or c in _DIGITS or c in _TRAILING_PUNCTUATION for c in element[1:]
    )


def _tld(host_part: str) -> str:
    _, dot, ext = host_part.rpartition(".")
    return dot + ext if dot else ""


def is_valid_remote_path(import_path: str) -> bool:
    """Return True if import_path is structurally valid for a remote fetch.

    Args:
        import_path: Candidate import path, e.g. ``gitlab.com/acme/widgets``.

    Returns:
        True when the host has an allow-listed TLD and a valid DNS grammar
        and every remaining segment is a valid path element.
    """
    parts = import_path.split("/")

    if _tld(parts[0]) not in VALID_TLDS:
        return False

    # Use only the hostname if the path carries a user name.
    host = parts[0].split("@")
    hostname = host[1] if len(host) > 1 else host[0]

    if not _VALID_HOST.match(hostname):
        return False

    return all(_is_valid_path_element(part) for part in parts[1:])


def is_go_repo_path(path: str) -> bool:
    """Return True if path is part of the Go standard distribution."""
    return PATH_FLAGS.get(path, 0) & GO_REPO_PATH != 0


def is_valid_path(import_path: str) -> bool:
    """Return True if import_path is a known package or a valid remote path."""
    return (
        PATH_FLAGS.get(import_path, 0) & PACKAGE_PATH != 0
        or PATH_FLAGS.get("vendor/" + import_path, 0) & PACKAGE_PATH != 0
        or is_valid_remote_path(import_path)
    )
