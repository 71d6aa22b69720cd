"""Client for the FCM HTTP v1 API."""

import json
from typing import Any

from django.conf import settings

import structlog

from relay.constants.push import DEFAULT_BADGE, DEFAULT_SOUND, FCM_CLICK_ACTION
from relay.enums import GatewayVariant
from relay.services.gateway.base_gateway import BasePushGateway, require_mapping
from relay.services.gateway.service_account import (
    ServiceAccountCredentials,
    ServiceAccountTokenClient,
)

logger = structlog.get_logger(__name__)


class FCMv1Gateway(BasePushGateway):
    """Sends with a short-lived OAuth2 token minted from a service account.

    The token is fetched once per ``authenticate`` call and reused for every
    message of the batch; it is never cached across batches.
    """

    variant = GatewayVariant.V1

    def __init__(
        self,
        credentials: ServiceAccountCredentials | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize v1 gateway client.

        Args:
            credentials: Service account; loaded from settings when omitted
            base_url: FCM API root; defaults to FCM_BASE_URL
            timeout: Per-request timeout in seconds
        """
        super().__init__(timeout=timeout)
        self._credentials = credentials
        self.base_url = (base_url or settings.FCM_BASE_URL).rstrip("/")
        self._access_token: str | None = None

    @property
    def credentials(self) -> ServiceAccountCredentials:
        """Service account, loaded from settings on first use."""
        if self._credentials is None:
            self._credentials = ServiceAccountCredentials.from_settings()
        return self._credentials

    @property
    def send_url(self) -> str:
        """Project scoped messages:send endpoint."""
        project_id = self.credentials.project_id
        return f"{self.base_url}/v1/projects/{project_id}/messages:send"

    def check_configuration(self) -> None:
        """Fail if the service account is missing or incomplete."""
        ServiceAccountTokenClient(self.credentials).build_assertion()

    def authenticate(self) -> None:
        """Mint the access token used for this batch."""
        client = ServiceAccountTokenClient(self.credentials, timeout=self.timeout)
        self._access_token = client.fetch_access_token()
        logger.info("gateway_access_token_obtained", gateway=self.variant.value)

    def _build_request(
        self, token: str, title: str, body: str, data: dict[str, Any] | None
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        if self._access_token is None:
            self.authenticate()

        payload = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": stringify_data(data),
                "android": {
                    "priority": "high",
                    "notification": {
                        "sound": DEFAULT_SOUND,
                        "click_action": FCM_CLICK_ACTION,
                    },
                },
                "apns": {
                    "payload": {"aps": {"sound": DEFAULT_SOUND, "badge": DEFAULT_BADGE}}
                },
            }
        }
        headers = {"Authorization": f"Bearer {self._access_token}"}
        return self.send_url, headers, payload


def stringify_data(data: dict[str, Any] | None) -> dict[str, str]:
    """Coerce payload values to strings; the v1 API rejects anything else.

    Strings pass through, other values are JSON encoded and ``None`` values
    are dropped.

    Raises:
        InvalidPushPayloadError: If ``data`` is not a mapping
    """
    require_mapping(data)
    if not data:
        return {}
    return {
        str(key): value if isinstance(value, str) else json.dumps(value)
        for key, value in data.items()
        if value is not None
    }
