"""
Payment gateway integration modules

Provides the gateway contract, the registry used to build gateways by name,
and the virtual test gateway.
"""

from .accounts import (
    GatewayAccount,
    GatewayAccountProvider,
    InMemoryGatewayAccountProvider,
    SettingsGatewayAccountProvider,
    VirtualGatewayAccount,
)
from .base import (
    GatewayNotRegisteredError,
    GatewayRegistry,
    HttpContext,
    Invoice,
    Payment,
    PaymentError,
    PaymentGateway,
    PaymentRefundResult,
    PaymentRequestResult,
    PaymentStatus,
    PaymentVerifyResult,
)
from .builtin import register_builtin_gateways
from .options import MessagesOptions, VirtualGatewayOptions
from .transport import GatewayPost, GatewayRedirect, GatewayTransporter
from .virtual_adapter import VirtualGateway

__all__ = [
    "GatewayAccount",
    "GatewayAccountProvider",
    "InMemoryGatewayAccountProvider",
    "SettingsGatewayAccountProvider",
    "VirtualGatewayAccount",
    "GatewayNotRegisteredError",
    "GatewayRegistry",
    "HttpContext",
    "Invoice",
    "Payment",
    "PaymentError",
    "PaymentGateway",
    "PaymentRefundResult",
    "PaymentRequestResult",
    "PaymentStatus",
    "PaymentVerifyResult",
    "register_builtin_gateways",
    "MessagesOptions",
    "VirtualGatewayOptions",
    "GatewayPost",
    "GatewayRedirect",
    "GatewayTransporter",
    "VirtualGateway",
]
