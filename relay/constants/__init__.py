"""Constants package for the relay application."""

from relay.constants.http import (
    CORS_HEADERS,
    PROCESS_TIME_HEADER,
    REQUEST_ID_HEADER,
    SECURITY_HEADERS,
    SLOW_REQUEST_THRESHOLD,
)
from relay.constants.push import (
    ALL_TOKENS_FAILED_MESSAGE,
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_RETRIES,
    DISPATCH_IN_PROGRESS_MESSAGE,
    INVALID_DATA_MESSAGE,
    INVALID_TOKEN_STATUS_CODES,
    NO_DEVICE_TOKENS_MESSAGE,
    NO_PENDING_NOTIFICATIONS_MESSAGE,
    TOKEN_LOG_PREFIX_LENGTH,
)

__all__ = [
    "ALL_TOKENS_FAILED_MESSAGE",
    "CORS_HEADERS",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_MAX_RETRIES",
    "DISPATCH_IN_PROGRESS_MESSAGE",
    "INVALID_DATA_MESSAGE",
    "INVALID_TOKEN_STATUS_CODES",
    "NO_DEVICE_TOKENS_MESSAGE",
    "NO_PENDING_NOTIFICATIONS_MESSAGE",
    "PROCESS_TIME_HEADER",
    "REQUEST_ID_HEADER",
    "SECURITY_HEADERS",
    "SLOW_REQUEST_THRESHOLD",
    "TOKEN_LOG_PREFIX_LENGTH",
]
