"""Client for the legacy (server key) FCM send API."""

from typing import Any

from django.conf import settings

import structlog

from relay.constants.push import DEFAULT_SOUND, FCM_LEGACY_ICON
from relay.enums import GatewayVariant
from relay.exceptions import GatewayConfigurationError
from relay.services.gateway.base_gateway import BasePushGateway

logger = structlog.get_logger(__name__)


class LegacyFCMGateway(BasePushGateway):
    """Sends with a long-lived server key in ``Authorization: key=...``."""

    variant = GatewayVariant.LEGACY

    def __init__(
        self,
        server_key: str | None = None,
        send_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize legacy gateway client.

        Args:
            server_key: FCM server key; defaults to FCM_SERVER_KEY
            send_url: Send endpoint; defaults to FCM_LEGACY_SEND_URL
            timeout: Per-request timeout in seconds
        """
        super().__init__(timeout=timeout)
        self.server_key = (
            server_key if server_key is not None else settings.FCM_SERVER_KEY
        )
        self.send_url = send_url or settings.FCM_LEGACY_SEND_URL
        self._authorization: str | None = None

    def check_configuration(self) -> None:
        """Fail if no server key is configured."""
        if not self.server_key:
            logger.error("fcm_server_key_missing")
            raise GatewayConfigurationError(
                "FCM_SERVER_KEY not found in environment variables"
            )

    def authenticate(self) -> None:
        """Use the server key as the credential for this batch."""
        self.check_configuration()
        self._authorization = f"key={self.server_key}"

    def _build_request(
        self, token: str, title: str, body: str, data: dict[str, Any] | None
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        if self._authorization is None:
            self.authenticate()

        payload = {
            "to": token,
            "notification": {
                "title": title,
                "body": body,
                "icon": FCM_LEGACY_ICON,
                "sound": DEFAULT_SOUND,
            },
            "data": data or {},
            "priority": "high",
            "content_available": True,
        }
        return self.send_url, {"Authorization": self._authorization}, payload
