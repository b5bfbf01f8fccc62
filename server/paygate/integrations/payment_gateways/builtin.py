"""Registration of the gateways shipped with paygate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .accounts import SettingsGatewayAccountProvider, VirtualGatewayAccount
from .base import GatewayRegistry
from .virtual_adapter import VirtualGateway

if TYPE_CHECKING:
    from paygate.core.config import Settings


def register_builtin_gateways(registry: GatewayRegistry, settings: "Settings") -> GatewayRegistry:
    """Register built-in gateway implementations on ``registry``."""

    def create_virtual_gateway() -> VirtualGateway:
        return VirtualGateway(
            options=settings.virtual_gateway_options(),
            account_provider=SettingsGatewayAccountProvider(settings, VirtualGatewayAccount),
            messages=settings.messages,
        )

    registry.register(VirtualGateway.name, create_virtual_gateway)
    return registry
