"""Schemas for queuing a push notification."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from relay.enums import PushStatus
from relay.schemas.base_schema_model import BaseSchemaModel


class PushNotificationCreate(BaseSchemaModel):
    """Request body for queuing a notification to an agent's devices."""

    agent_id: UUID = Field(..., description="Agent to notify")
    title: str = Field(..., min_length=1, max_length=255, description="Title")
    body: str = Field(..., min_length=1, description="Body text")
    data: dict[str, Any] | None = Field(
        None, description="Key/value payload delivered with the notification"
    )
    message_id: UUID | None = Field(
        None, description="Chat message that produced the notification"
    )
    max_retries: int | None = Field(
        None, ge=1, le=10, description="Retry allowance for unexpected errors"
    )


class PushNotificationQueued(BaseSchemaModel):
    """Queue record returned after a notification was enqueued."""

    id: UUID
    agent_id: UUID
    status: PushStatus
    created_at: datetime
    dispatch_scheduled: bool = Field(
        False, description="Whether an asynchronous dispatch job was enqueued"
    )
