"""Request timing middleware."""

import time
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

import structlog

from relay.constants import PROCESS_TIME_HEADER, SLOW_REQUEST_THRESHOLD

logger = structlog.get_logger(__name__)


class ProcessTimeMiddleware:
    """Report request duration in ``X-Process-Time`` and log slow requests.

    Dispatch runs make one gateway call per device token, so they are the
    requests most likely to cross the slow threshold.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Time the request."""
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed = time.perf_counter() - started

        response[PROCESS_TIME_HEADER] = f"{elapsed:.6f}"
        if elapsed > SLOW_REQUEST_THRESHOLD:
            logger.warning(
                "slow_request",
                method=request.method,
                path=request.path,
                duration_seconds=round(elapsed, 3),
                threshold_seconds=SLOW_REQUEST_THRESHOLD,
            )
        return response
