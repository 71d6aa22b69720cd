"""Common behaviour of push gateway clients."""

from collections.abc import Mapping
from typing import Any

from django.conf import settings

import requests
import structlog

from relay.constants import INVALID_TOKEN_STATUS_CODES
from relay.enums import GatewayVariant
from relay.exceptions import InvalidPushPayloadError, PushDeliveryError

logger = structlog.get_logger(__name__)


class DeliveryResult:
    """Outcome of one delivery attempt to one device token."""

    def __init__(
        self,
        token: str,
        success: bool,
        status_code: int | None = None,
        error: str | None = None,
    ):
        """Initialize delivery result.

        Args:
            token: Device token the message was addressed to
            success: Whether the gateway accepted the message
            status_code: HTTP status returned by the gateway
            error: Gateway response body when rejected
        """
        self.token = token
        self.success = success
        self.status_code = status_code
        self.error = error

    @property
    def token_invalid(self) -> bool:
        """True when the gateway says the token can never be delivered to."""
        return not self.success and self.status_code in INVALID_TOKEN_STATUS_CODES

    def __repr__(self) -> str:
        """Return detailed representation of the result."""
        return (
            f"<DeliveryResult(success={self.success}, "
            f"status_code={self.status_code}, "
            f"token_invalid={self.token_invalid})>"
        )


class BasePushGateway:
    """Base class for push gateway HTTP clients.

    Subclasses acquire a credential in ``authenticate`` and describe a single
    message in ``_build_request``; this class performs the POST and maps the
    response to a DeliveryResult.
    """

    variant: GatewayVariant

    def __init__(self, timeout: float | None = None):
        """Initialize gateway client.

        Args:
            timeout: Per-request timeout in seconds
        """
        self.timeout = timeout or settings.FCM_REQUEST_TIMEOUT

    def check_configuration(self) -> None:
        """Validate the configured credential without contacting the gateway.

        Raises:
            GatewayConfigurationError: If the credential is missing or malformed
        """
        raise NotImplementedError

    def authenticate(self) -> None:
        """Acquire the credential used for the current batch.

        Raises:
            GatewayConfigurationError: If the credential is not configured
            GatewayAuthenticationError: If the credential exchange fails
        """
        raise NotImplementedError

    def _build_request(
        self, token: str, title: str, body: str, data: dict[str, Any] | None
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Return ``(url, headers, json_body)`` for one message."""
        raise NotImplementedError

    def send(
        self,
        token: str,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> DeliveryResult:
        """Deliver one notification to one device token.

        Args:
            token: Gateway device token
            title: Notification title
            body: Notification body text
            data: Optional key/value payload

        Returns:
            DeliveryResult; rejections are results, not exceptions

        Raises:
            PushDeliveryError: If the gateway could not be reached
            InvalidPushPayloadError: If ``data`` is not a JSON object
        """
        require_mapping(data)
        url, headers, payload = self._build_request(token, title, body, data)
        headers.setdefault("Content-Type", "application/json")

        try:
            response = requests.post(
                url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(
                "push_gateway_unreachable",
                gateway=self.variant.value,
                token=token,
                error=str(e),
            )
            raise PushDeliveryError(token=token, message=str(e)) from e

        if response.ok:
            logger.info(
                "push_delivered",
                gateway=self.variant.value,
                token=token,
                status_code=response.status_code,
            )
            return DeliveryResult(
                token=token, success=True, status_code=response.status_code
            )

        logger.warning(
            "push_rejected",
            gateway=self.variant.value,
            token=token,
            status_code=response.status_code,
            response_text=response.text,
        )
        return DeliveryResult(
            token=token,
            success=False,
            status_code=response.status_code,
            error=response.text,
        )


def require_mapping(data: Any) -> None:
    """Reject payloads that are JSON but not an object (lists, scalars).

    Raises:
        InvalidPushPayloadError: If ``data`` is neither None nor a mapping
    """
    if data is not None and not isinstance(data, Mapping):
        raise InvalidPushPayloadError(
            f"Notification data must be a JSON object, got {type(data).__name__}"
        )
