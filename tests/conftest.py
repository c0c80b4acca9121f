"""
Pytest configuration and fixtures for apidrift tests.
"""

from __future__ import annotations

import logging
import os
from typing import Generator

import pytest

from apidrift.config import reset_config


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch) -> Generator[None, None, None]:
    """Keep APIDRIFT_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("APIDRIFT_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture(autouse=True)
def reset_global_config() -> Generator[None, None, None]:
    """Each test starts from a fresh configuration singleton."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_apidrift_logger() -> Generator[None, None, None]:
    """Undo configure_logging() so caplog sees apidrift records."""
    yield
    logger = logging.getLogger("apidrift")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
