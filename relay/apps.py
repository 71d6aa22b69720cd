"""Django application configuration for the relay."""

import structlog
from django.apps import AppConfig
from django.conf import settings

from relay.logging import cleanup_old_logs, setup_logging

logger = structlog.get_logger(__name__)


class RelayConfig(AppConfig):
    """Configuration class for the relay application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "relay"
    verbose_name = "Push relay"

    def ready(self) -> None:
        """Configure structlog and log the active gateway settings."""
        if settings.STRUCTLOG_ENABLED:
            setup_logging()
            cleanup_old_logs()

        logger.info(
            "relay_ready",
            gateway=settings.FCM_API_VERSION,
            batch_size=settings.PUSH_DISPATCH_BATCH_SIZE,
            dispatch_lock_enabled=settings.PUSH_DISPATCH_LOCK_ENABLED,
        )
