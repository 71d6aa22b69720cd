"""URL routing configuration for the relay application."""

from django.urls import path

from .views import (
    DeviceTokenDetailView,
    DeviceTokenRegisterView,
    LivenessCheckView,
    ProcessPushNotificationsView,
    PushNotificationQueueView,
    QueueStatsView,
    ReadinessCheckView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Dispatch worker
    path(
        "process-push-notifications",
        ProcessPushNotificationsView.as_view(),
        name="process-push-notifications",
    ),
    # Device tokens
    path("devices", DeviceTokenRegisterView.as_view(), name="device-register"),
    path(
        "devices/<path:device_token>",
        DeviceTokenDetailView.as_view(),
        name="device-detail",
    ),
    # Queue
    path(
        "notifications",
        PushNotificationQueueView.as_view(),
        name="push-notification-queue",
    ),
    path("stats", QueueStatsView.as_view(), name="queue-stats"),
]
