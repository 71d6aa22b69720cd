"""Service account credentials and OAuth2 JWT-bearer token exchange.

The FCM HTTP v1 API only accepts short-lived OAuth2 access tokens. They are
obtained by signing an RS256 assertion with the service account's private key
and exchanging it at Google's token endpoint.
"""

import json
import time
from pathlib import Path
from typing import Any

from django.conf import settings

import jwt
import requests
import structlog

from relay.constants.push import (
    ASSERTION_LIFETIME_SECONDS,
    FCM_MESSAGING_SCOPE,
    GOOGLE_TOKEN_URI,
    JWT_BEARER_GRANT_TYPE,
)
from relay.exceptions import GatewayAuthenticationError, GatewayConfigurationError

logger = structlog.get_logger(__name__)


class ServiceAccountCredentials:
    """The parts of a Google service account key needed to mint tokens."""

    def __init__(
        self,
        project_id: str,
        client_email: str,
        private_key: str,
        token_uri: str = GOOGLE_TOKEN_URI,
    ):
        """Initialize credentials.

        Args:
            project_id: Firebase project the messages are sent through
            client_email: Service account e-mail, used as assertion issuer
            private_key: PEM encoded PKCS#8 private key
            token_uri: OAuth2 token endpoint and assertion audience
        """
        self.project_id = project_id
        self.client_email = client_email
        self.private_key = private_key
        self.token_uri = token_uri or GOOGLE_TOKEN_URI

    @classmethod
    def from_mapping(cls, info: dict[str, Any]) -> "ServiceAccountCredentials":
        """Build credentials from a service account JSON document.

        Raises:
            GatewayConfigurationError: If a required field is missing
        """
        missing = [
            field
            for field in ("project_id", "client_email", "private_key")
            if not info.get(field)
        ]
        if missing:
            raise GatewayConfigurationError(
                f"Service account is missing required fields: {', '.join(missing)}"
            )

        return cls(
            project_id=info["project_id"],
            client_email=info["client_email"],
            # Keys pasted into env files often carry literal "\n" sequences.
            private_key=info["private_key"].replace("\\n", "\n"),
            token_uri=info.get("token_uri") or GOOGLE_TOKEN_URI,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "ServiceAccountCredentials":
        """Load credentials from a downloaded service account key file.

        Raises:
            GatewayConfigurationError: If the file is unreadable or malformed
        """
        try:
            info = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise GatewayConfigurationError(
                f"Could not read FCM service account file {path}: {e}"
            ) from e
        if not isinstance(info, dict):
            raise GatewayConfigurationError(
                f"FCM service account file {path} is not a JSON object"
            )
        return cls.from_mapping(info)

    @classmethod
    def from_settings(cls) -> "ServiceAccountCredentials":
        """Load credentials from FCM_SERVICE_ACCOUNT_FILE or FCM_* settings.

        Raises:
            GatewayConfigurationError: If no complete credential is configured
        """
        if settings.FCM_SERVICE_ACCOUNT_FILE:
            return cls.from_file(settings.FCM_SERVICE_ACCOUNT_FILE)

        return cls.from_mapping(
            {
                "project_id": settings.FCM_PROJECT_ID,
                "client_email": settings.FCM_CLIENT_EMAIL,
                "private_key": settings.FCM_PRIVATE_KEY,
                "token_uri": settings.FCM_TOKEN_URI,
            }
        )


class ServiceAccountTokenClient:
    """Exchanges a signed service account assertion for an access token."""

    def __init__(self, credentials: ServiceAccountCredentials, timeout: float = 10):
        """Initialize token client.

        Args:
            credentials: Service account used to sign the assertion
            timeout: Token request timeout in seconds
        """
        self.credentials = credentials
        self.timeout = timeout

    def build_assertion(self, now: int | None = None) -> str:
        """Sign the RS256 JWT presented to the token endpoint.

        Args:
            now: Issue time as a unix timestamp; defaults to the current time

        Raises:
            GatewayConfigurationError: If the private key cannot sign
        """
        issued_at = int(time.time()) if now is None else now
        claims = {
            "iss": self.credentials.client_email,
            "scope": FCM_MESSAGING_SCOPE,
            "aud": self.credentials.token_uri,
            "iat": issued_at,
            "exp": issued_at + ASSERTION_LIFETIME_SECONDS,
        }
        try:
            return jwt.encode(claims, self.credentials.private_key, algorithm="RS256")
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.error("service_account_key_invalid", error=str(e))
            raise GatewayConfigurationError(
                f"FCM private key could not sign the token request: {e}"
            ) from e

    def fetch_access_token(self) -> str:
        """Obtain a fresh access token for the messaging scope.

        Returns:
            Bearer access token

        Raises:
            GatewayAuthenticationError: If the exchange fails
        """
        assertion = self.build_assertion()

        logger.info(
            "fetching_gateway_access_token",
            client_email=self.credentials.client_email,
            token_uri=self.credentials.token_uri,
        )
        try:
            response = requests.post(
                self.credentials.token_uri,
                data={"grant_type": JWT_BEARER_GRANT_TYPE, "assertion": assertion},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("gateway_token_request_exception", error=str(e))
            raise GatewayAuthenticationError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "gateway_token_request_failed",
                status_code=response.status_code,
                response=response.text,
            )
            raise GatewayAuthenticationError(
                f"Token request failed with status {response.status_code}: "
                f"{response.text}",
                status_code=response.status_code,
            )

        try:
            access_token = response.json().get("access_token")
        except ValueError as e:
            raise GatewayAuthenticationError(
                "Token endpoint returned a non-JSON response"
            ) from e

        if not access_token:
            logger.error("gateway_token_missing_in_response")
            raise GatewayAuthenticationError(
                "Token endpoint response did not include an access_token"
            )

        return access_token
