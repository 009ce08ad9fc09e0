"""Custom middleware components."""

from microblog.core.middleware.logging import LoggingMiddleware
from microblog.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
