"""Custom exceptions for push gateway communication and dispatch."""

from relay.constants import DISPATCH_IN_PROGRESS_MESSAGE, INVALID_DATA_MESSAGE


class PushGatewayError(Exception):
    """Base exception for push gateway errors."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize push gateway error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the gateway, if any
        """
        self.status_code = status_code
        super().__init__(message)


class GatewayConfigurationError(PushGatewayError):
    """Gateway credential or variant is missing or malformed.

    Fatal for the whole invocation: nothing can be sent without it.
    """


class GatewayAuthenticationError(PushGatewayError):
    """Exchanging the service-account assertion for an access token failed."""


class PushDeliveryError(PushGatewayError):
    """A single delivery attempt could not reach the gateway."""

    def __init__(self, token: str, message: str):
        """Initialize delivery error.

        Args:
            token: Device token the delivery was addressed to
            message: Error message
        """
        self.token = token
        super().__init__(message)


class InvalidPushPayloadError(PushGatewayError):
    """The notification's data payload cannot be encoded for the gateway.

    Permanent for the notification: retrying sends the same payload.
    """

    def __init__(self, message: str = INVALID_DATA_MESSAGE):
        """Initialize invalid payload error.

        Args:
            message: Error message
        """
        super().__init__(message)


class DispatchInProgressError(Exception):
    """Another dispatch run currently holds the dispatch lease (409)."""

    def __init__(self, message: str = DISPATCH_IN_PROGRESS_MESSAGE):
        """Initialize dispatch in progress error.

        Args:
            message: Error message
        """
        super().__init__(message)


class DeviceTokenNotFoundError(Exception):
    """Device token is not registered (404)."""

    def __init__(self, device_token: str):
        """Initialize device token not found error.

        Args:
            device_token: Token that was looked up
        """
        self.device_token = device_token
        super().__init__(f"Device token {device_token[:20]}... not found")
