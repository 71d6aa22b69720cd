"""Services for the relay app."""

from relay.services.device_token_service import (
    DeviceTokenService,
    device_token_service,
)
from relay.services.dispatch_service import PushDispatchService, dispatch_lease
from relay.services.health_service import HealthService, health_service
from relay.services.queue_service import PushQueueService, push_queue_service

__all__ = [
    "DeviceTokenService",
    "HealthService",
    "PushDispatchService",
    "PushQueueService",
    "device_token_service",
    "dispatch_lease",
    "health_service",
    "push_queue_service",
]
