"""Scope based permissions for relay endpoints."""

from django.conf import settings

import structlog
from rest_framework.permissions import BasePermission

logger = structlog.get_logger(__name__)

SCOPE_DEVICE = "push:device"
SCOPE_SEND = "push:send"
SCOPE_ADMIN = "push:admin"


class HasPushScope(BasePermission):
    """Require one of the view's ``required_scopes`` or the admin scope.

    With OAuth2 disabled (local development) every request is allowed.
    """

    message = "You do not have permission to perform this action"

    def has_permission(self, request, view) -> bool:
        """Check the authenticated principal's scopes against the view."""
        if not settings.OAUTH2_SERVICE_ENABLED:
            return True

        principal = request.user
        if not principal or not getattr(principal, "is_authenticated", False):
            return False

        required = tuple(getattr(view, "required_scopes", ()))
        if principal.has_any_scope(*required, SCOPE_ADMIN):
            return True

        logger.warning(
            "missing_required_scope",
            subject=getattr(principal, "subject", None),
            required=list(required),
            scopes=getattr(principal, "scopes", []),
        )
        return False
