"""
Virtual Payment Gateway Adapter

A test gateway served by this application itself. Request posts the invoice
to the virtual provider page; the page posts ``Result`` and
``TransactionCode`` back to the invoice's callback URL.
"""

from decimal import Decimal
from typing import Optional

from paygate.core.logging import get_logger

from .accounts import GatewayAccountProvider, VirtualGatewayAccount
from .base import (
    HttpContext,
    Invoice,
    Payment,
    PaymentGateway,
    PaymentRefundResult,
    PaymentRequestResult,
    PaymentVerifyResult,
)
from .options import MessagesOptions, VirtualGatewayOptions
from .transport import GatewayPost

logger = get_logger(__name__)


class VirtualGateway(PaymentGateway):
    """Virtual payment gateway adapter."""

    name = "Virtual"

    COMMAND_TYPE_FIELD = "CommandType"
    TRACKING_NUMBER_FIELD = "trackingNumber"
    AMOUNT_FIELD = "amount"
    REDIRECT_URL_FIELD = "redirectUrl"
    RESULT_FIELD = "Result"
    TRANSACTION_CODE_FIELD = "TransactionCode"

    REQUEST_COMMAND = "request"

    def __init__(
        self,
        options: VirtualGatewayOptions,
        account_provider: GatewayAccountProvider[VirtualGatewayAccount],
        messages: MessagesOptions,
    ):
        """
        Initialize virtual gateway.

        Args:
            options: Gateway path configuration
            account_provider: Source of virtual gateway accounts
            messages: Messages attached to verify and refund results
        """
        self.options = options
        self.account_provider = account_provider
        self.messages = messages

    async def request(self, invoice: Invoice, context: HttpContext) -> PaymentRequestResult:
        account = await self._get_account(invoice.account_name)
        if account is None:
            logger.warning(
                "virtual_gateway.account_not_found",
                account_name=invoice.account_name,
                tracking_number=invoice.tracking_number,
            )

        url = f"{context.scheme}://{context.host}{self.options.gateway_path}"

        transporter = GatewayPost(
            url,
            {
                self.COMMAND_TYPE_FIELD: self.REQUEST_COMMAND,
                self.TRACKING_NUMBER_FIELD: str(invoice.tracking_number),
                self.AMOUNT_FIELD: str(int(invoice.amount)),
                self.REDIRECT_URL_FIELD: invoice.callback_url,
            },
        )

        logger.info(
            "virtual_gateway.request",
            tracking_number=invoice.tracking_number,
            url=url,
        )

        return PaymentRequestResult.succeed(
            transporter,
            gateway_name=self.name,
            gateway_account_name=account.name if account is not None else None,
        )

    async def verify(self, payment: Payment, context: HttpContext) -> PaymentVerifyResult:
        result = context.get_param(self.RESULT_FIELD)
        if result is None:
            logger.warning("virtual_gateway.verify_invalid_data", tracking_number=payment.tracking_number)
            return PaymentVerifyResult.failed(self.messages.invalid_data_received_from_gateway)

        transaction_code = context.get_param(self.TRANSACTION_CODE_FIELD)

        is_succeed = result.lower() == "true"

        logger.info(
            "virtual_gateway.verify",
            tracking_number=payment.tracking_number,
            succeeded=is_succeed,
            transaction_code=transaction_code,
        )

        if is_succeed:
            return PaymentVerifyResult.succeed(self.messages.payment_succeed, transaction_code)
        return PaymentVerifyResult.failed(self.messages.payment_failed, transaction_code)

    async def refund(self, payment: Payment, amount: Decimal) -> PaymentRefundResult:
        logger.info("virtual_gateway.refund", tracking_number=payment.tracking_number, amount=str(amount))
        return PaymentRefundResult.succeed(amount=amount, message=self.messages.payment_refunded)

    async def _get_account(self, account_name: str) -> Optional[VirtualGatewayAccount]:
        accounts = await self.account_provider.load_accounts()
        return accounts.get(account_name)
