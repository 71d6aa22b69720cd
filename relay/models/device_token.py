"""AgentDeviceToken model binding push gateway tokens to agents."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from relay.enums import DevicePlatform


class AgentDeviceToken(models.Model):
    """A push gateway device token registered for an agent.

    Tokens are never deleted by this service. When the gateway reports a
    token as permanently invalid it is deactivated, and only active tokens
    are used as recipients.

    Attributes:
        id: Unique identifier for the registration.
        agent_id: Agent account owning the device.
        device_token: Opaque token issued by the push gateway.
        platform: Device platform (ios, android).
        is_active: Whether the token is eligible to receive notifications.
        device_name: Friendly device name reported by the app.
        last_used_at: When the app last (re-)registered the token.
        created_at: When the token was first registered.
        updated_at: When the registration was last changed.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the device registration",
    )
    agent_id = models.UUIDField(help_text="Agent account owning the device")
    device_token = models.TextField(
        unique=True,
        help_text="Token issued by the push gateway for this device",
    )
    platform = models.CharField(
        max_length=10,
        choices=[(p.value, p.value) for p in DevicePlatform],
        help_text="Device platform (ios, android)",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Whether the token is eligible to receive notifications",
    )
    device_name = models.CharField(
        max_length=100,
        default="",
        blank=True,
        help_text="Friendly device name reported by the app",
    )
    last_used_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the app last registered the token",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "agent_device_tokens"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["agent_id", "is_active"]),
        ]

    def __str__(self) -> str:
        """Return string representation of the device token."""
        return f"{self.platform} device for agent {self.agent_id}"

    def __repr__(self) -> str:
        """Return detailed representation of the device token."""
        return (
            f"<AgentDeviceToken(agent_id={self.agent_id}, "
            f"platform={self.platform}, "
            f"is_active={self.is_active})>"
        )

    def deactivate(self) -> None:
        """Exclude the token from future dispatches."""
        self.is_active = False
        self.save(update_fields=["is_active", "updated_at"])

    def reactivate(
        self, agent_id: uuid.UUID, platform: str, device_name: str = ""
    ) -> None:
        """Mark the token as active again after the app re-registered it.

        Args:
            agent_id: Agent now owning the device.
            platform: Platform reported with the registration.
            device_name: Optional device name to record.
        """
        self.agent_id = agent_id
        self.platform = platform
        self.is_active = True
        self.last_used_at = timezone.now()
        update_fields = [
            "agent_id",
            "platform",
            "is_active",
            "last_used_at",
            "updated_at",
        ]
        if device_name:
            self.device_name = device_name
            update_fields.append("device_name")
        self.save(update_fields=update_fields)
