"""Push gateway clients and the factory selecting one from settings."""

from django.conf import settings

from relay.enums import GatewayVariant
from relay.exceptions import GatewayConfigurationError
from relay.services.gateway.base_gateway import BasePushGateway, DeliveryResult
from relay.services.gateway.legacy_gateway import LegacyFCMGateway
from relay.services.gateway.service_account import (
    ServiceAccountCredentials,
    ServiceAccountTokenClient,
)
from relay.services.gateway.v1_gateway import FCMv1Gateway, stringify_data

_GATEWAYS: dict[GatewayVariant, type[BasePushGateway]] = {
    GatewayVariant.LEGACY: LegacyFCMGateway,
    GatewayVariant.V1: FCMv1Gateway,
}


def build_push_gateway(variant: str | None = None) -> BasePushGateway:
    """Return the gateway client selected by FCM_API_VERSION.

    Args:
        variant: Overrides the configured variant ("v1" or "legacy")

    Raises:
        GatewayConfigurationError: If the variant is unknown
    """
    name = (variant or settings.FCM_API_VERSION or "").strip().lower()
    try:
        gateway_class = _GATEWAYS[GatewayVariant(name)]
    except ValueError as e:
        raise GatewayConfigurationError(
            f"Unsupported FCM_API_VERSION {name!r}; expected 'v1' or 'legacy'"
        ) from e
    return gateway_class()


__all__ = [
    "BasePushGateway",
    "DeliveryResult",
    "FCMv1Gateway",
    "LegacyFCMGateway",
    "ServiceAccountCredentials",
    "ServiceAccountTokenClient",
    "build_push_gateway",
    "stringify_data",
]
