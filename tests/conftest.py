"""Shared test fixtures and configuration for the Microblog service tests.

The environment is pinned before any application module is imported: the
limiter, the OAuth2 scheme and the pagination query bounds read settings at
import time.
"""

from __future__ import annotations

import os


os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-minimum-32-characters-long")

from typing import TYPE_CHECKING  # noqa: E402

import pytest  # noqa: E402

from microblog.core.config import Settings, get_settings  # noqa: E402
from microblog.core.rate_limit import limiter  # noqa: E402
from microblog.observability.logging import clear_context  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def settings() -> Settings:
    """The test-environment settings."""
    return get_settings()


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Generator[None]:
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None]:
    """Drop request-scoped logging context between tests."""
    clear_context()
    yield
    clear_context()
