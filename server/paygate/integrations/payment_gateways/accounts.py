"""
Gateway account providers.

An account is a named bundle of provider credentials. Gateways look accounts
up by name on every request; a missing name is not an error at this layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Generic, Iterable, TypeVar

if TYPE_CHECKING:
    from paygate.core.config import Settings


@dataclass(frozen=True)
class GatewayAccount:
    """Named provider configuration."""
    name: str


@dataclass(frozen=True)
class VirtualGatewayAccount(GatewayAccount):
    """The virtual gateway needs no credentials."""


AccountT = TypeVar("AccountT", bound=GatewayAccount)


class GatewayAccountProvider(ABC, Generic[AccountT]):
    """Source of the accounts of one gateway."""

    @abstractmethod
    async def load_accounts(self) -> Dict[str, AccountT]:
        """Return every known account keyed by name."""


class InMemoryGatewayAccountProvider(GatewayAccountProvider[AccountT]):
    def __init__(self, accounts: Iterable[AccountT]):
        self._accounts: Dict[str, AccountT] = {}
        for account in accounts:
            if account.name in self._accounts:
                raise ValueError(f"Duplicate gateway account name '{account.name}'")
            self._accounts[account.name] = account

    async def load_accounts(self) -> Dict[str, AccountT]:
        return dict(self._accounts)


class SettingsGatewayAccountProvider(GatewayAccountProvider[AccountT]):
    """Builds accounts from the names listed in ``settings.virtual_gateway_accounts``."""

    def __init__(self, settings: "Settings", factory: Callable[[str], AccountT]):
        self._settings = settings
        self._factory = factory

    async def load_accounts(self) -> Dict[str, AccountT]:
        return {name: self._factory(name) for name in self._settings.virtual_gateway_accounts}
