"""Shared fixtures for dunechar tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from dunechar.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Reload settings around every test so patched environments apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_namespace_logger() -> Iterator[None]:
    """Undo configure_logging calls made by a test."""
    namespace_logger = logging.getLogger("dunechar")
    handlers = list(namespace_logger.handlers)
    level = namespace_logger.level
    propagate = namespace_logger.propagate
    yield
    namespace_logger.handlers[:] = handlers
    namespace_logger.setLevel(level)
    namespace_logger.propagate = propagate
