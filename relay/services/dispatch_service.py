"""Dispatch worker draining the push notification queue.

One run authenticates against the push gateway, claims the oldest pending
notifications (at most ``batch_size``) and, one notification at a time, sends
to every active device token of the target agent:

- no active token: the notification fails without consuming a retry
- every token rejected: the notification fails without consuming a retry
- data that is not a JSON object: the notification fails without consuming
  a retry
- at least one token accepted: the notification is sent
- unexpected error: the retry counter is bumped and the notification is put
  back to pending until its retry allowance is used up

Gateway responses of 400/404 deactivate the token they were addressed to.
Configuration, authentication and batch-fetch errors abort the run before any
row is touched.
"""

import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache

import structlog

from relay.constants import (
    ALL_TOKENS_FAILED_MESSAGE,
    NO_DEVICE_TOKENS_MESSAGE,
    NO_PENDING_NOTIFICATIONS_MESSAGE,
)
from relay.enums import PushStatus
from relay.exceptions import (
    DispatchInProgressError,
    InvalidPushPayloadError,
    PushDeliveryError,
)
from relay.models import PushNotificationRequest
from relay.schemas.push import DispatchDetails, DispatchSummary
from relay.services.device_token_service import (
    DeviceTokenService,
    device_token_service,
)
from relay.services.gateway import BasePushGateway, build_push_gateway

logger = structlog.get_logger(__name__)


class PushDispatchService:
    """Processes one batch of pending push notifications per call."""

    def __init__(
        self,
        gateway_factory: Callable[[], BasePushGateway] = build_push_gateway,
        batch_size: int | None = None,
        token_service: DeviceTokenService | None = None,
    ) -> None:
        """Initialize dispatch service.

        Args:
            gateway_factory: Builds the gateway client for a run.
            batch_size: Maximum notifications claimed per run; defaults to
                PUSH_DISPATCH_BATCH_SIZE.
            token_service: Device token lookups and deactivation.
        """
        self.gateway_factory = gateway_factory
        self.batch_size = batch_size or settings.PUSH_DISPATCH_BATCH_SIZE
        self.token_service = token_service or device_token_service

    def process_pending(self) -> DispatchSummary:
        """Run one dispatch batch under the dispatch lease.

        Raises:
            DispatchInProgressError: If another run holds the lease.
            GatewayConfigurationError: If the gateway credential is missing.
            GatewayAuthenticationError: If the gateway rejects the credential.
            DatabaseError: If the pending batch cannot be read.
        """
        with dispatch_lease() as renew_lease:
            return self._run_batch(renew_lease)

    def _run_batch(
        self, renew_lease: Callable[[], None] | None = None
    ) -> DispatchSummary:
        gateway = self.gateway_factory()
        gateway.authenticate()

        pending = list(
            PushNotificationRequest.objects.filter(
                status=PushStatus.PENDING.value
            ).order_by("created_at")[: self.batch_size]
        )
        if not pending:
            logger.info("push_queue_empty")
            return DispatchSummary(
                success=True, message=NO_PENDING_NOTIFICATIONS_MESSAGE
            )

        logger.info(
            "push_batch_claimed",
            count=len(pending),
            gateway=gateway.variant.value,
        )

        sent = 0
        for notification in pending:
            if self._process_notification(gateway, notification):
                sent += 1
            if renew_lease is not None:
                renew_lease()

        details = DispatchDetails(
            total=len(pending), success=sent, failed=len(pending) - sent
        )
        logger.info("push_batch_completed", **details.model_dump())
        return DispatchSummary(
            success=True,
            message=f"Processed {len(pending)} notifications",
            details=details,
        )

    def _process_notification(
        self, gateway: BasePushGateway, notification: PushNotificationRequest
    ) -> bool:
        """Deliver one notification and record its outcome.

        Returns:
            True if the notification was marked sent.
        """
        log = logger.bind(
            notification_id=str(notification.id),
            agent_id=str(notification.agent_id),
        )
        try:
            tokens = self.token_service.get_active_tokens(notification.agent_id)
            if not tokens:
                notification.mark_failed(NO_DEVICE_TOKENS_MESSAGE)
                log.warning("push_notification_failed", reason="no_device_tokens")
                return False

            all_failed = True
            try:
                for device in tokens:
                    if self._deliver(gateway, notification, device.device_token):
                        all_failed = False
            except InvalidPushPayloadError as e:
                notification.mark_failed(str(e))
                log.warning(
                    "push_notification_failed", reason="invalid_data", error=str(e)
                )
                return False

            if all_failed:
                notification.mark_failed(ALL_TOKENS_FAILED_MESSAGE)
                log.warning(
                    "push_notification_failed",
                    reason="all_tokens_failed",
                    token_count=len(tokens),
                )
                return False

            notification.mark_sent()
            log.info("push_notification_sent", token_count=len(tokens))
            return True

        except Exception as e:
            log.exception("push_notification_error", error=str(e))
            self._record_failure(notification, str(e) or type(e).__name__)
            return False

    def _record_failure(
        self, notification: PushNotificationRequest, error_msg: str
    ) -> None:
        """Charge an unexpected error against the notification's retry allowance.

        A failing write here must not abort the rest of the batch; the row
        stays pending and is picked up again by a later run.
        """
        try:
            requeued = notification.record_attempt_failure(error_msg)
        except Exception:
            logger.exception(
                "push_outcome_not_recorded", notification_id=str(notification.id)
            )
            return

        logger.warning(
            "push_notification_retry_recorded",
            notification_id=str(notification.id),
            retry_count=notification.retry_count,
            max_retries=notification.effective_max_retries,
            requeued=requeued,
        )

    def _deliver(
        self,
        gateway: BasePushGateway,
        notification: PushNotificationRequest,
        device_token: str,
    ) -> bool:
        """Send to one token; True if the gateway accepted the message."""
        try:
            result = gateway.send(
                device_token,
                notification.title,
                notification.body,
                notification.data,
            )
        except PushDeliveryError as e:
            logger.warning(
                "push_token_delivery_error",
                notification_id=str(notification.id),
                token=device_token,
                error=str(e),
            )
            return False

        if result.success:
            return True

        if result.token_invalid:
            self.token_service.deactivate_invalid_token(device_token)
        return False


@contextmanager
def dispatch_lease() -> Iterator[Callable[[], None]]:
    """Hold the cache lease that keeps dispatch runs from overlapping.

    Yields a callable that pushes the lease expiry PUSH_DISPATCH_LOCK_TIMEOUT
    seconds into the future. The batch calls it after every notification, so
    the timeout only has to cover one notification while a crashed worker
    still cannot block dispatch forever.

    Raises:
        DispatchInProgressError: If the lease is already held.
    """
    if not settings.PUSH_DISPATCH_LOCK_ENABLED:
        yield lambda: None
        return

    key = settings.PUSH_DISPATCH_LOCK_KEY
    timeout = settings.PUSH_DISPATCH_LOCK_TIMEOUT
    owner = uuid.uuid4().hex
    if not cache.add(key, owner, timeout=timeout):
        logger.warning("push_dispatch_lease_held", lock_key=key)
        raise DispatchInProgressError()

    def renew() -> None:
        if cache.get(key) == owner:
            cache.touch(key, timeout)
        else:
            logger.warning("push_dispatch_lease_lost", lock_key=key)

    try:
        yield renew
    finally:
        if cache.get(key) == owner:
            cache.delete(key)
