"""
Virtual gateway adapter tests.

Covers the Request/Verify/Refund contract against the virtual provider's
field names and outcome flags.
"""

from decimal import Decimal

import pytest

from paygate.integrations.payment_gateways import (
    GatewayPost,
    HttpContext,
    InMemoryGatewayAccountProvider,
    Invoice,
    PaymentRefundResult,
    PaymentRequestResult,
    PaymentStatus,
    PaymentVerifyResult,
    VirtualGateway,
    VirtualGatewayOptions,
)
from paygate.integrations.payment_gateways.transport import TransportType


def callback_context(**params: str) -> HttpContext:
    return HttpContext(scheme="https", host="shop.example", params=params)


class TestVirtualGatewayRequest:
    """Request builds the post to the virtual provider page."""

    @pytest.mark.asyncio
    async def test_request_builds_post_to_gateway_path(self, virtual_gateway, sample_invoice, shop_context):
        result = await virtual_gateway.request(sample_invoice, shop_context)

        assert isinstance(result, PaymentRequestResult)
        assert result.is_succeed is True
        assert result.status == PaymentStatus.REQUESTED
        assert result.gateway_name == "Virtual"
        assert result.gateway_account_name == "main"

        assert isinstance(result.transporter, GatewayPost)
        descriptor = result.transporter.descriptor
        assert descriptor.type == TransportType.POST
        assert descriptor.url == "https://pay.example/virtual/gw"
        assert descriptor.form == {
            "CommandType": "request",
            "trackingNumber": "1001",
            "amount": "50000",
            "redirectUrl": "https://shop.example/done",
        }

    @pytest.mark.asyncio
    async def test_request_with_unknown_account_still_succeeds(self, virtual_gateway, shop_context):
        invoice = Invoice(
            tracking_number=7,
            amount=Decimal("1200"),
            callback_url="https://shop.example/done",
            gateway_name=VirtualGateway.name,
            account_name="missing",
        )

        result = await virtual_gateway.request(invoice, shop_context)

        assert result.is_succeed is True
        assert result.gateway_account_name is None
        assert result.transporter.descriptor.form["trackingNumber"] == "7"

    @pytest.mark.asyncio
    async def test_request_truncates_fractional_amount(self, virtual_gateway, shop_context):
        invoice = Invoice(
            tracking_number=2,
            amount=Decimal("1999.99"),
            callback_url="https://shop.example/done",
            gateway_name=VirtualGateway.name,
            account_name="main",
        )

        result = await virtual_gateway.request(invoice, shop_context)

        assert result.transporter.descriptor.form["amount"] == "1999"

    @pytest.mark.asyncio
    async def test_request_uses_context_scheme_host_and_configured_path(self, messages, sample_invoice):
        gateway = VirtualGateway(
            options=VirtualGatewayOptions(gateway_path="/sandbox/pay"),
            account_provider=InMemoryGatewayAccountProvider([]),
            messages=messages,
        )
        context = HttpContext(scheme="http", host="localhost:8080")

        result = await gateway.request(sample_invoice, context)

        assert result.transporter.descriptor.url == "http://localhost:8080/sandbox/pay"

    @pytest.mark.asyncio
    async def test_request_does_not_read_inbound_params(self, virtual_gateway, sample_invoice):
        context = HttpContext(scheme="https", host="pay.example", params={"amount": "1", "CommandType": "pay"})

        result = await virtual_gateway.request(sample_invoice, context)

        assert result.transporter.descriptor.form["amount"] == "50000"
        assert result.transporter.descriptor.form["CommandType"] == "request"


class TestVirtualGatewayVerify:
    """Verify interprets the Result and TransactionCode callback fields."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", ["true", "TRUE", "True"])
    async def test_verify_success_any_case(self, virtual_gateway, sample_payment, flag):
        result = await virtual_gateway.verify(
            sample_payment, callback_context(Result=flag, TransactionCode="TX-42")
        )

        assert isinstance(result, PaymentVerifyResult)
        assert result.is_succeed is True
        assert result.status == PaymentStatus.SUCCEEDED
        assert result.message == "Payment succeeded."
        assert result.transaction_code == "TX-42"

    @pytest.mark.asyncio
    async def test_verify_reported_failure(self, virtual_gateway, sample_payment):
        result = await virtual_gateway.verify(sample_payment, callback_context(Result="false"))

        assert result.is_succeed is False
        assert result.status == PaymentStatus.FAILED
        assert result.message == "Payment failed."
        assert result.transaction_code is None

    @pytest.mark.asyncio
    async def test_verify_garbage_flag_is_failure(self, virtual_gateway, sample_payment):
        result = await virtual_gateway.verify(
            sample_payment, callback_context(Result="yes", TransactionCode="TX-1")
        )

        assert result.is_succeed is False
        assert result.message == "Payment failed."
        assert result.transaction_code == "TX-1"

    @pytest.mark.asyncio
    async def test_verify_missing_result_is_invalid_data(self, virtual_gateway, sample_payment):
        result = await virtual_gateway.verify(
            sample_payment, callback_context(TransactionCode="TX-42", trackingNumber="1001")
        )

        assert result.is_succeed is False
        assert result.message == "Invalid data received from gateway."
        assert result.transaction_code is None

    @pytest.mark.asyncio
    async def test_verify_success_without_transaction_code(self, virtual_gateway, sample_payment):
        result = await virtual_gateway.verify(sample_payment, callback_context(Result="true"))

        assert result.is_succeed is True
        assert result.transaction_code is None

    @pytest.mark.asyncio
    async def test_verify_passes_empty_transaction_code_through(self, virtual_gateway, sample_payment):
        result = await virtual_gateway.verify(
            sample_payment, callback_context(Result="true", TransactionCode="")
        )

        assert result.transaction_code == ""

    @pytest.mark.asyncio
    async def test_verify_reads_parameter_names_case_insensitively(self, virtual_gateway, sample_payment):
        result = await virtual_gateway.verify(
            sample_payment, callback_context(result="true", transactioncode="abc")
        )

        assert result.is_succeed is True
        assert result.transaction_code == "abc"


class TestVirtualGatewayRefund:
    """Refund always succeeds for the virtual provider."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [Decimal("50000"), Decimal("0"), Decimal("-10")])
    async def test_refund_always_succeeds(self, virtual_gateway, sample_payment, amount):
        result = await virtual_gateway.refund(sample_payment, amount)

        assert isinstance(result, PaymentRefundResult)
        assert result.is_succeed is True
        assert result.status == PaymentStatus.REFUNDED
        assert result.amount == amount
        assert result.message == "Payment refunded."


class TestInvoice:
    """Invoices reject amounts a gateway cannot encode."""

    @pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(ValueError) as exc_info:
            Invoice(
                tracking_number=1,
                amount=Decimal(amount),
                callback_url="https://shop.example/done",
                gateway_name=VirtualGateway.name,
            )

        assert "finite" in str(exc_info.value)

    def test_amount_is_coerced_to_decimal(self):
        invoice = Invoice(
            tracking_number=1,
            amount="120.50",
            callback_url="https://shop.example/done",
            gateway_name=VirtualGateway.name,
        )

        assert invoice.amount == Decimal("120.50")
