"""Database models for the relay application."""

from relay.models.device_token import AgentDeviceToken
from relay.models.push_notification_request import PushNotificationRequest

__all__ = ["AgentDeviceToken", "PushNotificationRequest"]
