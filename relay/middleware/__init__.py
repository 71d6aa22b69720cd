"""Middleware components for the push relay service."""

from relay.middleware.process_time import ProcessTimeMiddleware
from relay.middleware.request_id import RequestIDMiddleware
from relay.middleware.security_context import SecurityContextMiddleware
from relay.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
    "SecurityContextMiddleware",
    "SecurityHeadersMiddleware",
]
