"""
Payment Gateway Base Classes and Interfaces

Defines the contract shared by every payment gateway adapter: the invoice and
payment records handed to a gateway, the immutable results it hands back, and
the registry used to build gateways by name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from paygate.core.logging import get_logger

if TYPE_CHECKING:
    from starlette.requests import Request

    from .transport import GatewayTransporter

logger = get_logger(__name__)

DEFAULT_ACCOUNT_NAME = "default"


class PaymentStatus(str, Enum):
    """Payment status enumeration."""
    REQUESTED = "requested"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REFUNDED = "refunded"


@dataclass(frozen=True)
class Invoice:
    """A caller-built description of a payment to be requested."""
    tracking_number: int
    amount: Decimal
    callback_url: str
    gateway_name: str
    account_name: str = DEFAULT_ACCOUNT_NAME
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        amount = Decimal(self.amount)
        if not amount.is_finite():
            raise ValueError(f"Invoice amount must be a finite number, got {amount}")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


@dataclass(frozen=True)
class Payment:
    """A requested or settled payment being verified or refunded."""
    tracking_number: int
    amount: Decimal
    gateway_name: str
    gateway_account_name: Optional[str] = None
    transaction_code: Optional[str] = None
    status: PaymentStatus = PaymentStatus.REQUESTED


@dataclass(frozen=True)
class HttpContext:
    """
    Inbound HTTP request data handed explicitly to a gateway.

    ``params`` holds query string values first and form fields second. Names
    are case-insensitive and the first occurrence of a name wins, so later
    spellings of the same name are dropped.
    """
    scheme: str
    host: str
    params: Mapping[str, str] = field(default_factory=dict)
    _folded: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        params: Dict[str, str] = {}
        folded: Dict[str, str] = {}
        for key, value in self.params.items():
            folded_key = key.casefold()
            if folded_key in folded:
                continue
            params[key] = value
            folded[folded_key] = value
        object.__setattr__(self, "params", MappingProxyType(params))
        object.__setattr__(self, "_folded", MappingProxyType(folded))

    def get_param(self, name: str) -> Optional[str]:
        """Return the named parameter (case-insensitive), or None when absent."""
        return self._folded.get(name.casefold())

    @classmethod
    async def from_request(cls, request: "Request") -> "HttpContext":
        """Build a context from a Starlette request, reading a form body when present."""
        params: Dict[str, str] = {}
        for key, value in request.query_params.multi_items():
            params.setdefault(key, value)

        content_type = request.headers.get("content-type", "")
        if request.method == "POST" and (
            content_type.startswith("application/x-www-form-urlencoded")
            or content_type.startswith("multipart/form-data")
        ):
            form = await request.form()
            for key, value in form.multi_items():
                if isinstance(value, str):
                    params.setdefault(key, value)

        return cls(scheme=request.url.scheme, host=request.url.netloc, params=params)


@dataclass(frozen=True)
class PaymentRequestResult:
    """Result of a Request operation."""
    is_succeed: bool
    gateway_name: str
    gateway_account_name: Optional[str] = None
    transporter: Optional["GatewayTransporter"] = None
    message: Optional[str] = None
    status: PaymentStatus = PaymentStatus.REQUESTED

    @classmethod
    def succeed(
        cls,
        transporter: "GatewayTransporter",
        gateway_name: str,
        gateway_account_name: Optional[str],
        message: Optional[str] = None,
    ) -> "PaymentRequestResult":
        return cls(
            is_succeed=True,
            gateway_name=gateway_name,
            gateway_account_name=gateway_account_name,
            transporter=transporter,
            message=message,
        )

    @classmethod
    def failed(
        cls,
        message: str,
        gateway_name: str,
        gateway_account_name: Optional[str] = None,
    ) -> "PaymentRequestResult":
        return cls(
            is_succeed=False,
            gateway_name=gateway_name,
            gateway_account_name=gateway_account_name,
            message=message,
            status=PaymentStatus.FAILED,
        )


@dataclass(frozen=True)
class PaymentVerifyResult:
    """Result of a Verify operation."""
    is_succeed: bool
    message: str
    transaction_code: Optional[str] = None
    status: PaymentStatus = PaymentStatus.FAILED

    @classmethod
    def succeed(cls, message: str, transaction_code: Optional[str] = None) -> "PaymentVerifyResult":
        return cls(
            is_succeed=True,
            message=message,
            transaction_code=transaction_code,
            status=PaymentStatus.SUCCEEDED,
        )

    @classmethod
    def failed(cls, message: str, transaction_code: Optional[str] = None) -> "PaymentVerifyResult":
        return cls(is_succeed=False, message=message, transaction_code=transaction_code)


@dataclass(frozen=True)
class PaymentRefundResult:
    """Result of a Refund operation."""
    is_succeed: bool
    amount: Optional[Decimal] = None
    message: Optional[str] = None
    status: PaymentStatus = PaymentStatus.FAILED

    @classmethod
    def succeed(cls, amount: Optional[Decimal] = None, message: Optional[str] = None) -> "PaymentRefundResult":
        return cls(is_succeed=True, amount=amount, message=message, status=PaymentStatus.REFUNDED)

    @classmethod
    def failed(cls, message: str, amount: Optional[Decimal] = None) -> "PaymentRefundResult":
        return cls(is_succeed=False, amount=amount, message=message)


class PaymentError(Exception):
    """Payment gateway specific errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(message)
        self.error_message = message
        self.error_code = error_code
        self.provider = provider


class GatewayNotRegisteredError(PaymentError):
    """Raised when a gateway name has no registered factory."""

    def __init__(self, name: str):
        super().__init__(
            f"No payment gateway registered under '{name}'",
            error_code="gateway_not_registered",
            provider=name,
        )


class PaymentGateway(ABC):
    """Abstract base class for payment gateway adapters."""

    name: str = "base"

    @abstractmethod
    async def request(self, invoice: Invoice, context: HttpContext) -> PaymentRequestResult:
        """
        Prepare the outbound transport that sends the user to the provider.

        Args:
            invoice: Invoice describing the payment
            context: Inbound HTTP request data

        Returns:
            PaymentRequestResult carrying the transporter to dispatch
        """

    @abstractmethod
    async def verify(self, payment: Payment, context: HttpContext) -> PaymentVerifyResult:
        """
        Interpret the parameters the provider sent back on the callback.

        Args:
            payment: Payment being verified
            context: Inbound callback request data

        Returns:
            PaymentVerifyResult with the outcome
        """

    @abstractmethod
    async def refund(self, payment: Payment, amount: Decimal) -> PaymentRefundResult:
        """
        Refund all or part of a payment.

        Args:
            payment: Payment to refund
            amount: Amount to refund

        Returns:
            PaymentRefundResult with the outcome
        """


GatewayFactory = Callable[[], PaymentGateway]


class GatewayRegistry:
    """Maps gateway names to factories. Names are case-insensitive."""

    def __init__(self) -> None:
        self._factories: Dict[str, GatewayFactory] = {}
        self._names: Dict[str, str] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def register(self, name: str, factory: GatewayFactory) -> None:
        """Register a gateway factory under ``name``."""
        key = self._key(name)
        if not key:
            raise ValueError("Gateway name must not be empty")
        if key in self._factories:
            raise ValueError(f"Gateway '{name}' is already registered")
        self._factories[key] = factory
        self._names[key] = name.strip()
        logger.info("gateway_registry.registered", gateway=name)

    def create(self, name: str) -> PaymentGateway:
        """Create a gateway instance."""
        factory = self._factories.get(self._key(name))
        if factory is None:
            raise GatewayNotRegisteredError(name)
        return factory()

    def names(self) -> List[str]:
        """Get list of registered gateway names."""
        return list(self._names.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._factories
