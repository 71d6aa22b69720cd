"""API views for the relay application."""

import structlog
from django.db import DatabaseError
from django.http import HttpResponse
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from relay.auth.context import set_current_principal
from relay.auth.oauth2 import OAuth2Authentication, OAuth2Principal
from relay.auth.permissions import (
    SCOPE_ADMIN,
    SCOPE_DEVICE,
    SCOPE_SEND,
    HasPushScope,
)
from relay.constants import CORS_HEADERS
from relay.exceptions import (
    DeviceTokenNotFoundError,
    DispatchInProgressError,
    PushGatewayError,
)
from relay.schemas.push import (
    DeviceTokenDetail,
    DeviceTokenRegistration,
    PushNotificationCreate,
    PushNotificationQueued,
)
from relay.services import (
    PushDispatchService,
    device_token_service,
    health_service,
    push_queue_service,
)

logger = structlog.get_logger(__name__)


def _validation_error_response(exc: ValidationError) -> Response:
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": exc.errors(include_url=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class UnauthenticatedView(APIView):
    """Base for endpoints reachable without credentials."""

    authentication_classes: list = []
    permission_classes = [AllowAny]


class AuthenticatedView(APIView):
    """Base for endpoints protected by OAuth2 scopes.

    Subclasses list the scopes they accept in ``required_scopes``; the
    admin scope is always accepted.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (HasPushScope,)
    required_scopes: tuple[str, ...] = ()

    def initial(self, request, *args, **kwargs):
        """Authenticate, then expose the caller to the service layer."""
        super().initial(request, *args, **kwargs)
        if isinstance(request.user, OAuth2Principal):
            set_current_principal(request.user)


class LivenessCheckView(UnauthenticatedView):
    """Liveness probe: 200 as long as the process serves requests."""

    def get(self, _request):
        """Return the liveness status."""
        return Response(
            health_service.get_liveness_status().model_dump(),
            status=status.HTTP_200_OK,
        )


class ReadinessCheckView(UnauthenticatedView):
    """Readiness probe.

    Returns 503 only when the database is unreachable. A down cache or an
    unconfigured gateway is reported as degraded with 200.
    """

    def get(self, _request):
        """Return the readiness status with per-dependency details."""
        readiness = health_service.get_readiness_status()
        return Response(
            readiness.model_dump(),
            status=(
                status.HTTP_200_OK
                if readiness.ready
                else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
        )


class ProcessPushNotificationsView(UnauthenticatedView):
    """Runs one dispatch batch; called by the scheduler.

    Every response carries permissive CORS headers. ``OPTIONS`` answers the
    preflight with an empty 200; every other method runs the batch.
    """

    dispatch_service_class = PushDispatchService

    def options(self, _request, *_args, **_kwargs):
        """Answer the CORS preflight."""
        return HttpResponse(status=status.HTTP_200_OK)

    def get(self, request):
        """Run the batch."""
        return self._process(request)

    def post(self, request):
        """Run the batch."""
        return self._process(request)

    put = patch = delete = post

    def finalize_response(self, request, response, *args, **kwargs):
        """Attach CORS headers to every response, errors included."""
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, value in CORS_HEADERS.items():
            response[header] = value
        return response

    def _process(self, _request):
        logger.info("push_dispatch_requested")
        try:
            summary = self.dispatch_service_class().process_pending()
        except DispatchInProgressError as e:
            return Response(
                {"success": False, "error": str(e)},
                status=status.HTTP_409_CONFLICT,
            )
        except (PushGatewayError, DatabaseError) as e:
            logger.error(
                "push_dispatch_aborted",
                error=str(e),
                error_type=type(e).__name__,
            )
            return Response(
                {"success": False, "error": str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception as e:
            logger.exception("push_dispatch_crashed")
            return Response(
                {"success": False, "error": str(e) or "Unknown error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(summary.to_response(), status=status.HTTP_200_OK)


class DeviceTokenRegisterView(AuthenticatedView):
    """Registers the gateway token of an agent's device.

    Called by the mobile app after login and whenever the gateway rotates
    the token. Re-registering a known token reactivates it.
    """

    required_scopes = (SCOPE_DEVICE,)

    def post(self, request):
        """Register or reactivate a device token.

        Returns:
            201 with the token when created, 200 when reactivated,
            400 when the body is invalid.
        """
        try:
            registration = DeviceTokenRegistration(**request.data)
        except ValidationError as e:
            logger.warning(
                "invalid_device_registration", validation_errors=e.errors()
            )
            return _validation_error_response(e)

        token, created = device_token_service.register_device(
            agent_id=registration.agent_id,
            device_token=registration.device_token,
            platform=registration.platform,
            device_name=registration.device_name,
        )
        return Response(
            DeviceTokenDetail.model_validate(token).model_dump(),
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class DeviceTokenDetailView(AuthenticatedView):
    """Deactivates a device token on logout."""

    required_scopes = (SCOPE_DEVICE,)

    def delete(self, _request, device_token: str):
        """Deactivate the token; 404 when it was never registered."""
        if not device_token_service.deactivate_device(device_token):
            raise DeviceTokenNotFoundError(device_token)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PushNotificationQueueView(AuthenticatedView):
    """Queues a push notification for an agent."""

    required_scopes = (SCOPE_SEND,)

    def post(self, request):
        """Queue the notification.

        Returns:
            201 with the queued row, 400 when the body is invalid.
        """
        try:
            payload = PushNotificationCreate(**request.data)
        except ValidationError as e:
            logger.warning("invalid_push_notification", validation_errors=e.errors())
            return _validation_error_response(e)

        notification, scheduled = push_queue_service.enqueue(
            agent_id=payload.agent_id,
            title=payload.title,
            body=payload.body,
            data=payload.data,
            message_id=payload.message_id,
            max_retries=payload.max_retries,
        )
        queued = PushNotificationQueued.model_validate(notification).model_copy(
            update={"dispatch_scheduled": scheduled}
        )
        return Response(queued.model_dump(), status=status.HTTP_201_CREATED)


class QueueStatsView(AuthenticatedView):
    """Queue statistics for operators."""

    required_scopes = (SCOPE_ADMIN,)

    def get(self, _request):
        """Return status, retry and error breakdowns of the queue."""
        return Response(
            push_queue_service.get_queue_stats().model_dump(),
            status=status.HTTP_200_OK,
        )
