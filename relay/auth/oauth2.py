"""OAuth2 bearer authentication for Django REST Framework.

Callers of the device, enqueue and stats endpoints present an access token
issued by the auth service. Tokens are validated locally against the shared
``JWT_SECRET``; the dispatch endpoint does not authenticate.
"""

from typing import Any

from django.conf import settings

import jwt
import structlog
from rest_framework import authentication, exceptions

logger = structlog.get_logger(__name__)

ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]


class OAuth2Principal:
    """Caller identity built from access token claims.

    Not a Django user model: the relay has no user table of its own.
    """

    def __init__(self, subject: str, client_id: str, scopes: list[str]):
        """Initialize principal.

        Args:
            subject: Token subject (agent id or client id for service callers)
            client_id: OAuth2 client that obtained the token
            scopes: Granted scopes
        """
        self.id = subject
        self.subject = subject
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Return True if the token grants ``scope``."""
        return scope in self.scopes

    def has_any_scope(self, *scopes: str) -> bool:
        """Return True if the token grants at least one of ``scopes``."""
        return any(scope in self.scopes for scope in scopes)

    def __str__(self):
        """String representation."""
        return f"OAuth2Principal(subject={self.subject}, client_id={self.client_id})"


class OAuth2Authentication(authentication.BaseAuthentication):
    """Bearer token authentication with local JWT validation."""

    def authenticate(self, request):
        """Authenticate the request from its ``Authorization`` header.

        Returns:
            Tuple of (principal, token), or None when OAuth2 is disabled or
            no credentials were sent.

        Raises:
            AuthenticationFailed: If the header is malformed or the token invalid
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token or " " in token:
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        claims = self._decode(token)
        principal = OAuth2Principal(
            subject=claims.get("sub") or claims.get("client_id") or "unknown",
            client_id=claims.get("client_id") or "unknown",
            scopes=_normalize_scopes(claims.get("scopes", claims.get("scope"))),
        )
        return (principal, token)

    def _decode(self, token: str) -> dict[str, Any]:
        """Verify the token signature and standard claims.

        Raises:
            AuthenticationFailed: If validation is not configured or fails
        """
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_missing")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            claims = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=ACCEPTED_ALGORITHMS,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("access_token_expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("access_token_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = claims.get("type", "access_token")
        if token_type != "access_token":
            logger.warning("access_token_wrong_type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")

        return claims

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"


def _normalize_scopes(raw: Any) -> list[str]:
    """Accept scopes as a list or as a space separated string."""
    if not raw:
        return []
    if isinstance(raw, str):
        return raw.split()
    return [str(scope) for scope in raw]
