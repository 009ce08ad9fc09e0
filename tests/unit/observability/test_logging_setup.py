"""Unit tests for logging configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson
import pytest
from loguru import logger

from microblog.observability.logging import (
    InterceptHandler,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    setup_logging,
    unbind_context,
)


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_loguru() -> Generator[None]:
    """Remove the sinks added by each test."""
    yield
    logger.remove()


class TestContext:
    """Tests for request-scoped context helpers."""

    def test_bind_and_get(self) -> None:
        """Should accumulate bound values."""
        bind_context(request_id="abc")
        bind_context(user_id=1)
        assert get_context() == {"request_id": "abc", "user_id": 1}

    def test_unbind(self) -> None:
        """Should drop selected keys only."""
        bind_context(request_id="abc", user_id=1)
        unbind_context("user_id", "missing")
        assert get_context() == {"request_id": "abc"}

    def test_clear(self) -> None:
        """Should drop everything."""
        bind_context(request_id="abc")
        clear_context()
        assert get_context() == {}

    def test_get_context_is_a_copy(self) -> None:
        """Should not leak mutations back into the context."""
        bind_context(request_id="abc")
        get_context()["request_id"] = "changed"
        assert get_context()["request_id"] == "abc"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_file_sink(self, tmp_path: Path) -> None:
        """Should write one JSON object per line including context."""
        log_file = tmp_path / "logs" / "app.log"
        setup_logging("INFO", "json", log_file=log_file)
        bind_context(request_id="req-1")

        get_logger("tests.logging").info("Hello", user_id=7)
        logger.complete()

        line = log_file.read_text().strip().splitlines()[-1]
        payload = orjson.loads(line)
        assert payload["message"] == "Hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "tests.logging"
        assert payload["request_id"] == "req-1"
        assert payload["user_id"] == 7

    def test_level_filtering(self, tmp_path: Path) -> None:
        """Should drop records below the configured level."""
        log_file = tmp_path / "app.log"
        setup_logging("WARNING", "json", log_file=log_file)

        get_logger("tests.logging").info("quiet")
        get_logger("tests.logging").warning("loud")
        logger.complete()

        content = log_file.read_text()
        assert "quiet" not in content
        assert "loud" in content

    def test_intercepts_stdlib(self) -> None:
        """Should route the standard library root logger into Loguru."""
        setup_logging("INFO", "text")

        handlers = logging.getLogger().handlers
        assert any(isinstance(h, InterceptHandler) for h in handlers)
        assert logging.getLogger("asyncpg").level == logging.WARNING
