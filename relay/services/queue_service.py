"""Queueing push notifications and reporting on the queue."""

from typing import Any
from uuid import UUID

from django.conf import settings
from django.db.models import Count, F, Q

import django_rq
import structlog

from relay.auth.context import get_current_principal
from relay.constants import DEFAULT_MAX_RETRIES
from relay.enums import PushStatus
from relay.models import AgentDeviceToken, PushNotificationRequest
from relay.schemas.push import (
    QueueRetryStatistics,
    QueueStats,
    QueueStatusBreakdown,
)

logger = structlog.get_logger(__name__)

DISPATCH_JOB = "relay.jobs.dispatch_jobs.process_push_queue_job"


class PushQueueService:
    """Writes rows to ``push_notification_queue`` and summarizes it."""

    def __init__(self, queue_name: str = "default") -> None:
        """Initialize queue service.

        Args:
            queue_name: django-rq queue used for automatic dispatch jobs.
        """
        self.queue_name = queue_name

    def enqueue(
        self,
        agent_id: UUID,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
        message_id: UUID | None = None,
        max_retries: int | None = None,
    ) -> tuple[PushNotificationRequest, bool]:
        """Queue a notification for the agent's devices.

        When PUSH_AUTO_DISPATCH is on, a dispatch job is scheduled right away
        instead of waiting for the next scheduled run.

        Returns:
            Tuple of (queued row, whether a dispatch job was scheduled).
        """
        notification = PushNotificationRequest.objects.create(
            agent_id=agent_id,
            title=title,
            body=body,
            data=data,
            message_id=message_id,
            status=PushStatus.PENDING.value,
            retry_count=0,
            max_retries=max_retries or DEFAULT_MAX_RETRIES,
        )

        principal = get_current_principal()
        logger.info(
            "push_notification_queued",
            notification_id=str(notification.id),
            agent_id=str(agent_id),
            message_id=str(message_id) if message_id else None,
            requested_by=principal.subject if principal else None,
        )

        scheduled = False
        if settings.PUSH_AUTO_DISPATCH:
            django_rq.get_queue(self.queue_name).enqueue(DISPATCH_JOB)
            scheduled = True
            logger.info("push_dispatch_job_scheduled", queue=self.queue_name)

        return notification, scheduled

    def get_queue_stats(self) -> QueueStats:
        """Count queue rows by status and by how they used their retries."""
        queryset = PushNotificationRequest.objects.all()

        counts = queryset.aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(status=PushStatus.PENDING.value)),
            sent=Count("id", filter=Q(status=PushStatus.SENT.value)),
            failed=Count("id", filter=Q(status=PushStatus.FAILED.value)),
            total_retried=Count("id", filter=Q(retry_count__gt=0)),
            currently_retrying=Count(
                "id",
                filter=Q(status=PushStatus.PENDING.value, retry_count__gt=0),
            ),
            exhausted_retries=Count(
                "id",
                filter=Q(status=PushStatus.FAILED.value)
                & (
                    Q(retry_count__gte=F("max_retries"), max_retries__gt=0)
                    | (
                        (Q(max_retries__isnull=True) | Q(max_retries=0))
                        & Q(retry_count__gte=DEFAULT_MAX_RETRIES)
                    )
                ),
            ),
        )

        failed_by_error = {
            row["error_message"] or "unknown": row["count"]
            for row in queryset.filter(status=PushStatus.FAILED.value)
            .values("error_message")
            .annotate(count=Count("id"))
            .order_by("-count")
        }

        return QueueStats(
            total=counts["total"],
            status_breakdown=QueueStatusBreakdown(
                pending=counts["pending"],
                sent=counts["sent"],
                failed=counts["failed"],
            ),
            retry_statistics=QueueRetryStatistics(
                total_retried=counts["total_retried"],
                currently_retrying=counts["currently_retrying"],
                exhausted_retries=counts["exhausted_retries"],
            ),
            failed_by_error=failed_by_error,
            active_device_tokens=AgentDeviceToken.objects.filter(
                is_active=True
            ).count(),
        )


push_queue_service = PushQueueService()
