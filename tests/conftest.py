"""Pytest configuration and fixtures."""

import httpx
import pytest

from docsrc.core.config import Config
from docsrc.sources import HTTPHelper


@pytest.fixture
def config() -> Config:
    """Provide a default Config instance for testing."""
    return Config()


@pytest.fixture
def http() -> HTTPHelper:
    """Provide an HTTPHelper backed by a fresh async client.

    Requests are intercepted by ``respx.mock`` in the tests that use it.
    """
    return HTTPHelper(httpx.AsyncClient())
