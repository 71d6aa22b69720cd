"""Schemas for registering and describing device tokens."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from relay.enums import DevicePlatform
from relay.schemas.base_schema_model import BaseSchemaModel


class DeviceTokenRegistration(BaseSchemaModel):
    """Request body sent by the mobile app after obtaining a gateway token."""

    agent_id: UUID = Field(..., description="Agent the device belongs to")
    device_token: str = Field(
        ..., min_length=1, max_length=4096, description="Gateway issued token"
    )
    platform: DevicePlatform = Field(..., description="Device platform")
    device_name: str = Field(
        default="", max_length=100, description="Friendly device name"
    )


class DeviceTokenDetail(BaseSchemaModel):
    """A registered device token as returned by the API."""

    id: UUID
    agent_id: UUID
    platform: DevicePlatform
    is_active: bool
    device_name: str = ""
    last_used_at: datetime | None = None
    created_at: datetime
