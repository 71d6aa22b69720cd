"""Device token registration and deactivation."""

from uuid import UUID

from django.db import transaction
from django.utils import timezone

import structlog

from relay.models import AgentDeviceToken

logger = structlog.get_logger(__name__)


class DeviceTokenService:
    """Keeps ``agent_device_tokens`` in line with what the apps report.

    Registration is keyed by the token itself: a token that moves to another
    agent (shared device, re-login) is rebound rather than duplicated.
    """

    def get_active_tokens(self, agent_id: UUID) -> list[AgentDeviceToken]:
        """Return the agent's tokens eligible for delivery."""
        return list(
            AgentDeviceToken.objects.filter(agent_id=agent_id, is_active=True)
        )

    @transaction.atomic
    def register_device(
        self,
        agent_id: UUID,
        device_token: str,
        platform: str,
        device_name: str = "",
    ) -> tuple[AgentDeviceToken, bool]:
        """Register a device token or reactivate an existing registration.

        Args:
            agent_id: Agent the device now belongs to.
            device_token: Gateway issued token.
            platform: "ios" or "android".
            device_name: Optional friendly name.

        Returns:
            Tuple of (token, created).
        """
        existing = (
            AgentDeviceToken.objects.select_for_update()
            .filter(device_token=device_token)
            .first()
        )
        if existing is not None:
            previous_agent = existing.agent_id
            existing.reactivate(
                agent_id=agent_id, platform=platform, device_name=device_name
            )
            logger.info(
                "device_token_reactivated",
                agent_id=str(agent_id),
                previous_agent_id=str(previous_agent),
                platform=platform,
                device_token=device_token,
            )
            return existing, False

        token = AgentDeviceToken.objects.create(
            agent_id=agent_id,
            device_token=device_token,
            platform=platform,
            device_name=device_name,
            is_active=True,
            last_used_at=timezone.now(),
        )
        logger.info(
            "device_token_registered",
            agent_id=str(agent_id),
            platform=platform,
            device_token=device_token,
        )
        return token, True

    def deactivate_device(self, device_token: str) -> bool:
        """Deactivate a token on explicit request (logout, uninstall).

        Returns:
            False if the token is not registered.
        """
        token = AgentDeviceToken.objects.filter(device_token=device_token).first()
        if token is None:
            logger.info("device_token_not_registered", device_token=device_token)
            return False

        if token.is_active:
            token.deactivate()
        logger.info(
            "device_token_deactivated",
            agent_id=str(token.agent_id),
            device_token=device_token,
            reason="requested",
        )
        return True

    def deactivate_invalid_token(self, device_token: str) -> int:
        """Deactivate a token the gateway reported as permanently invalid.

        Returns:
            Number of rows updated.
        """
        updated = AgentDeviceToken.objects.filter(device_token=device_token).update(
            is_active=False, updated_at=timezone.now()
        )
        logger.warning(
            "device_token_deactivated",
            device_token=device_token,
            reason="rejected_by_gateway",
            rows=updated,
        )
        return updated


device_token_service = DeviceTokenService()
