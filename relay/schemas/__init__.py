"""Schemas for the relay app."""

from relay.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from relay.schemas.push import (
    DeviceTokenDetail,
    DeviceTokenRegistration,
    DispatchDetails,
    DispatchSummary,
    PushNotificationCreate,
    PushNotificationQueued,
    QueueStats,
)

__all__ = [
    "DependencyHealth",
    "DeviceTokenDetail",
    "DeviceTokenRegistration",
    "DispatchDetails",
    "DispatchSummary",
    "LivenessResponse",
    "PushNotificationCreate",
    "PushNotificationQueued",
    "QueueStats",
    "ReadinessResponse",
]
