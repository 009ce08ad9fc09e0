"""Prometheus metrics instrumentation.

HTTP request metrics come from prometheus-fastapi-instrumentator; the domain
counters below are incremented by the services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from microblog.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "microblog"

SIGNUPS_TOTAL = Counter(
    "signups_total",
    "Accounts created through signup",
    namespace=METRIC_NAMESPACE,
)

MICROPOSTS_TOTAL = Counter(
    "microposts_total",
    "Micropost create/delete operations",
    ["action"],
    namespace=METRIC_NAMESPACE,
)

RELATIONSHIPS_TOTAL = Counter(
    "relationships_total",
    "Follow/unfollow operations",
    ["action"],
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator | None:
    """Instrument the app and expose ``{prefix}/metrics``.

    Returns:
        The configured Instrumentator, or None when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return None

    prefix = settings.api.v1_prefix
    metrics_endpoint = f"{prefix}/metrics"

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            metrics_endpoint,
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)
    return instrumentator


__all__ = [
    "MICROPOSTS_TOTAL",
    "RELATIONSHIPS_TOTAL",
    "SIGNUPS_TOTAL",
    "setup_metrics",
]
