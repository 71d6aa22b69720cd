"""Push-related enumerations.

This module contains enums for queue record statuses, device platforms and
the push gateway API variants the service can be deployed against.
"""

from enum import Enum


class PushStatus(str, Enum):
    """Lifecycle status of a queued push notification.

    Values are lowercase because the queue table is shared with the mobile
    console, which writes and filters on these literals.
    """

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class DevicePlatform(str, Enum):
    """Mobile platform a device token was issued for."""

    IOS = "ios"
    ANDROID = "android"


class GatewayVariant(str, Enum):
    """Push gateway API variants.

    LEGACY authenticates with a static server key, V1 with a short-lived
    OAuth2 access token obtained from a service account.
    """

    LEGACY = "legacy"
    V1 = "v1"
