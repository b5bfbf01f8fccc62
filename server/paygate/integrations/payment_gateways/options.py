"""
Gateway option models.

Plain pydantic models so they can be nested inside the application settings
and overridden from the environment (for example ``MESSAGES__PAYMENT_FAILED``).
"""

from pydantic import BaseModel, Field


class MessagesOptions(BaseModel):
    """Human readable messages attached to payment results."""

    payment_succeed: str = Field(default="Payment succeeded.")
    payment_failed: str = Field(default="Payment failed.")
    payment_refunded: str = Field(default="Payment refunded.")
    invalid_data_received_from_gateway: str = Field(default="Invalid data received from gateway.")


class VirtualGatewayOptions(BaseModel):
    """Options of the virtual test gateway."""

    gateway_path: str = Field(default="/virtual/gw")
