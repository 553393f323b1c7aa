"""Shared pytest fixtures for testing."""

import pytest
import structlog

from tokenbox.config import Settings, get_settings
from tokenbox.di import Container, reset_container


@pytest.fixture(autouse=True)
def isolated_state():
    """Reset cached settings and the global container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()
    structlog.reset_defaults()


@pytest.fixture
def container() -> Container:
    """Create a container with arity validation enabled."""
    return Container(Settings(strict_arity=True))


@pytest.fixture
def lenient_container() -> Container:
    """Create a container with arity validation disabled."""
    return Container(Settings(strict_arity=False))
