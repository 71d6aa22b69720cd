"""Global exception handlers for the push relay service."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from relay.exceptions.push_exceptions import (
    DeviceTokenNotFoundError,
    DispatchInProgressError,
    GatewayAuthenticationError,
    GatewayConfigurationError,
)
from relay.logging.context import get_request_id

logger = logging.getLogger(__name__)

# Exceptions whose own message is safe to hand back to the client.
_EXPOSED_ERRORS: tuple[tuple[type[Exception], int], ...] = (
    (DeviceTokenNotFoundError, status.HTTP_404_NOT_FOUND),
    (DispatchInProgressError, status.HTTP_409_CONFLICT),
)

# Gateway problems are reported without leaking credential details.
_GATEWAY_ERRORS: tuple[tuple[type[Exception], int, str], ...] = (
    (
        GatewayConfigurationError,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Push gateway is not configured.",
    ),
    (
        GatewayAuthenticationError,
        status.HTTP_502_BAD_GATEWAY,
        "Push gateway authentication failed.",
    ),
)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Handles DRF, Django and relay exceptions, providing:
    - Standard response format for clients: {status, message, request_id, timestamp}
    - Detailed logging for troubleshooting: error type, path, stack trace

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    response = exception_handler(exc, context)
    if response is None:
        status_code, message = _resolve_status(exc)
        response = Response(
            _create_error_response(status_code, message, request_id),
            status=status_code,
        )

    if request_id and response:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _resolve_status(exc: Exception) -> tuple[int, str]:
    """Map a non-DRF exception to a status code and client message."""
    for exc_type, status_code in _EXPOSED_ERRORS:
        if isinstance(exc, exc_type):
            return status_code, str(exc)

    for exc_type, status_code, message in _GATEWAY_ERRORS:
        if isinstance(exc, exc_type):
            return status_code, message

    if isinstance(exc, Http404):
        return status.HTTP_404_NOT_FOUND, "The requested resource was not found."
    if isinstance(exc, PermissionDenied):
        return (
            status.HTTP_403_FORBIDDEN,
            "You do not have permission to perform this action.",
        )
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal server error occurred."


def _create_error_response(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    """Create a standardized error response.

    Args:
        status_code: The HTTP status code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Dictionary with standard error response format.
    """
    return {
        "status": status_code,
        "message": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response | None,
) -> None:
    """Log exception details, with a stack trace when DEBUG is on.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response object (if available).
    """
    status_code = response.status_code if response else 500
    if isinstance(exc, APIException | Http404) or 400 <= status_code < 500:
        log_level = logging.WARNING if status_code < 500 else logging.ERROR
    else:
        log_level = logging.ERROR

    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"
        if request:
            log_message += f"\nRequest details: {_get_request_details(request)}"

    logger.log(log_level, log_message)


def _get_request_details(request: Any) -> str:
    """Extract relevant request details for logging."""
    details = {
        "method": request.method,
        "path": request.path,
        "user": getattr(request, "user", "anonymous"),
        "ip": request.META.get("REMOTE_ADDR", "unknown"),
    }
    if request.GET:
        details["query_params"] = dict(request.GET)
    return str(details)
