"""PushNotificationRequest model for the push notification queue.

This module defines the queue record the dispatch worker drains. Rows are
written by the support console (one per chat event that should reach an
agent's devices) and are only ever transitioned by this service.
"""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from relay.constants import DEFAULT_MAX_RETRIES
from relay.enums import PushStatus


class PushNotificationRequest(models.Model):
    """A queued push notification addressed to an agent.

    The target is a logical recipient (``agent_id``), not a device. Device
    tokens are resolved at dispatch time from AgentDeviceToken.

    Attributes:
        id: Unique identifier for the queue record.
        agent_id: Agent account the notification is addressed to.
        title: Notification title.
        body: Notification body text.
        data: Optional key/value payload delivered alongside the notification.
        message_id: Chat message that produced the notification, if any.
        status: Lifecycle status (pending, sent, failed).
        retry_count: Attempts that ended in an unexpected error (NULL = 0).
        max_retries: Retry allowance for unexpected errors (NULL or 0 = 3).
        error_message: Reason for the last failure.
        processed_at: When the record was last processed.
        created_at: When the record was queued; claim order key.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the queued notification",
    )
    agent_id = models.UUIDField(
        help_text="Agent account the notification is addressed to",
    )
    title = models.TextField(help_text="Notification title")
    body = models.TextField(help_text="Notification body text")
    data = models.JSONField(
        null=True,
        blank=True,
        help_text="Optional key/value payload delivered with the notification",
    )
    message_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="Chat message that produced the notification",
    )
    status = models.CharField(
        max_length=20,
        default=PushStatus.PENDING.value,
        choices=[(s.value, s.value) for s in PushStatus],
        help_text="Lifecycle status (pending, sent, failed)",
    )
    retry_count = models.IntegerField(
        null=True,
        blank=True,
        default=0,
        help_text="Attempts that ended in an unexpected error",
    )
    max_retries = models.IntegerField(
        null=True,
        blank=True,
        default=DEFAULT_MAX_RETRIES,
        help_text="Retry allowance for unexpected errors",
    )
    error_message = models.TextField(
        null=True,
        blank=True,
        help_text="Reason for the last failure",
    )
    processed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the record was last processed",
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the notification was queued",
    )

    class Meta:
        """Django model metadata."""

        db_table = "push_notification_queue"
        managed = False
        ordering: ClassVar[list[str]] = ["created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["status", "created_at"]),
            models.Index(fields=["agent_id"]),
        ]

    def __str__(self) -> str:
        """Return string representation of the queued notification."""
        return f"push {self.id} for agent {self.agent_id} ({self.status})"

    def __repr__(self) -> str:
        """Return detailed representation of the queued notification."""
        return (
            f"<PushNotificationRequest(id={self.id}, "
            f"agent_id={self.agent_id}, "
            f"status={self.status}, "
            f"retry_count={self.retry_count})>"
        )

    @property
    def effective_max_retries(self) -> int:
        """Retry allowance, treating a missing or zero value as the default."""
        return self.max_retries or DEFAULT_MAX_RETRIES

    def mark_sent(self) -> None:
        """Mark the notification as delivered to at least one device."""
        self.status = PushStatus.SENT.value
        self.processed_at = timezone.now()
        self.save(update_fields=["status", "processed_at"])

    def mark_failed(self, error_msg: str) -> None:
        """Mark the notification as terminally failed.

        The retry counter is left untouched: this is used for outcomes that
        retrying cannot change (no recipients, every token rejected).

        Args:
            error_msg: Description of the failure.
        """
        self.status = PushStatus.FAILED.value
        self.error_message = error_msg
        self.processed_at = timezone.now()
        self.save(update_fields=["status", "error_message", "processed_at"])

    def record_attempt_failure(self, error_msg: str) -> bool:
        """Record an unexpected processing error against the retry allowance.

        Increments ``retry_count`` and puts the record back to pending while
        allowance remains, otherwise marks it failed.

        Args:
            error_msg: Message of the error that aborted processing.

        Returns:
            True if the notification was re-queued, False if it is now failed.
        """
        self.retry_count = (self.retry_count or 0) + 1
        requeued = self.retry_count < self.effective_max_retries
        self.status = (
            PushStatus.PENDING.value if requeued else PushStatus.FAILED.value
        )
        self.error_message = error_msg
        self.processed_at = timezone.now()
        self.save(
            update_fields=["status", "retry_count", "error_message", "processed_at"]
        )
        return requeued
