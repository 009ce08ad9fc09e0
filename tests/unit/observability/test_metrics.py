"""Unit tests for metrics setup."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from microblog.observability.metrics import (
    MICROPOSTS_TOTAL,
    RELATIONSHIPS_TOTAL,
    SIGNUPS_TOTAL,
    setup_metrics,
)


pytestmark = pytest.mark.unit


def _settings(*, enabled: bool) -> MagicMock:
    settings = MagicMock()
    settings.observability.metrics.enabled = enabled
    settings.api.v1_prefix = "/api/v1"
    return settings


class TestSetupMetrics:
    """Tests for setup_metrics."""

    def test_disabled(self) -> None:
        """Should not instrument when disabled."""
        assert setup_metrics(FastAPI(), _settings(enabled=False)) is None

    def test_enabled(self) -> None:
        """Should instrument and expose the metrics endpoint."""
        app = FastAPI()

        with patch("microblog.observability.metrics.Instrumentator") as instrumentator_cls:
            instrumentator = setup_metrics(app, _settings(enabled=True))

        assert instrumentator is instrumentator_cls.return_value
        instrumentator.instrument.assert_called_once_with(app)
        expose = instrumentator.expose.call_args
        assert expose.kwargs["endpoint"] == "/api/v1/metrics"
        excluded = instrumentator_cls.call_args.kwargs["excluded_handlers"]
        assert "/api/v1/health" in excluded


class TestDomainCounters:
    """Tests for the domain counters."""

    def test_names(self) -> None:
        """Should live in the microblog namespace."""
        assert SIGNUPS_TOTAL._name == "microblog_signups"
        assert MICROPOSTS_TOTAL._labelnames == ("action",)
        assert RELATIONSHIPS_TOTAL._labelnames == ("action",)
