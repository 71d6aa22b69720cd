"""Push notification schemas."""

from relay.schemas.push.device_token_registration import (
    DeviceTokenDetail,
    DeviceTokenRegistration,
)
from relay.schemas.push.dispatch_summary import DispatchDetails, DispatchSummary
from relay.schemas.push.push_notification_create import (
    PushNotificationCreate,
    PushNotificationQueued,
)
from relay.schemas.push.queue_stats import (
    QueueRetryStatistics,
    QueueStats,
    QueueStatusBreakdown,
)

__all__ = [
    "DeviceTokenDetail",
    "DeviceTokenRegistration",
    "DispatchDetails",
    "DispatchSummary",
    "PushNotificationCreate",
    "PushNotificationQueued",
    "QueueRetryStatistics",
    "QueueStats",
    "QueueStatusBreakdown",
]
