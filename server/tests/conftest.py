"""
Shared test configuration and fixtures for the paygate test suite.
"""

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from paygate.core.config import Settings, clear_settings_cache
from paygate.integrations.payment_gateways import (
    HttpContext,
    InMemoryGatewayAccountProvider,
    Invoice,
    MessagesOptions,
    Payment,
    VirtualGateway,
    VirtualGatewayAccount,
    VirtualGatewayOptions,
)
from paygate.main import create_application


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def messages() -> MessagesOptions:
    return MessagesOptions(
        payment_succeed="Payment succeeded.",
        payment_failed="Payment failed.",
        payment_refunded="Payment refunded.",
    )


@pytest.fixture
def account_provider() -> InMemoryGatewayAccountProvider:
    return InMemoryGatewayAccountProvider([VirtualGatewayAccount(name="main")])


@pytest.fixture
def virtual_gateway(account_provider, messages) -> VirtualGateway:
    return VirtualGateway(
        options=VirtualGatewayOptions(gateway_path="/virtual/gw"),
        account_provider=account_provider,
        messages=messages,
    )


@pytest.fixture
def sample_invoice() -> Invoice:
    return Invoice(
        tracking_number=1001,
        amount=Decimal("50000"),
        callback_url="https://shop.example/done",
        gateway_name=VirtualGateway.name,
        account_name="main",
    )


@pytest.fixture
def sample_payment() -> Payment:
    return Payment(
        tracking_number=1001,
        amount=Decimal("50000"),
        gateway_name=VirtualGateway.name,
        gateway_account_name="main",
    )


@pytest.fixture
def shop_context() -> HttpContext:
    return HttpContext(scheme="https", host="pay.example")


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        app_name="Paygate Test",
        environment="test",
        virtual_gateway_path="/virtual/gw",
        virtual_gateway_accounts=["default", "main"],
    )


@pytest.fixture
def test_client(test_settings) -> Generator[TestClient, None, None]:
    with TestClient(create_application(test_settings)) as client:
        yield client
