"""Schemas for queue statistics."""

from pydantic import Field

from relay.schemas.base_schema_model import BaseSchemaModel


class QueueStatusBreakdown(BaseSchemaModel):
    """Notification counts per status."""

    pending: int = Field(0, ge=0)
    sent: int = Field(0, ge=0)
    failed: int = Field(0, ge=0)


class QueueRetryStatistics(BaseSchemaModel):
    """How notifications consumed their retry allowance."""

    total_retried: int = Field(0, ge=0, description="Rows retried at least once")
    currently_retrying: int = Field(
        0, ge=0, description="Pending rows with at least one failed attempt"
    )
    exhausted_retries: int = Field(
        0, ge=0, description="Failed rows that used their whole retry allowance"
    )


class QueueStats(BaseSchemaModel):
    """Snapshot of the push notification queue."""

    total: int = Field(..., ge=0, description="Rows in the queue table")
    status_breakdown: QueueStatusBreakdown
    retry_statistics: QueueRetryStatistics
    failed_by_error: dict[str, int] = Field(
        default_factory=dict, description="Failed rows grouped by error message"
    )
    active_device_tokens: int = Field(
        0, ge=0, description="Device tokens currently eligible for delivery"
    )
