"""Exception handling utilities for the push relay service."""

from relay.exceptions.handlers import custom_exception_handler
from relay.exceptions.push_exceptions import (
    DeviceTokenNotFoundError,
    DispatchInProgressError,
    GatewayAuthenticationError,
    GatewayConfigurationError,
    InvalidPushPayloadError,
    PushDeliveryError,
    PushGatewayError,
)

__all__ = [
    "DeviceTokenNotFoundError",
    "DispatchInProgressError",
    "GatewayAuthenticationError",
    "GatewayConfigurationError",
    "InvalidPushPayloadError",
    "PushDeliveryError",
    "PushGatewayError",
    "custom_exception_handler",
]
