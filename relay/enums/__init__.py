"""Enumerations for the relay app."""

from relay.enums.health_status import HealthStatus
from relay.enums.push import DevicePlatform, GatewayVariant, PushStatus

__all__ = ["DevicePlatform", "GatewayVariant", "HealthStatus", "PushStatus"]
