"""Status types and the adapter protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class StatusState(Enum):
    """State of a single direction (deposit or withdraw) for one asset."""

    OPEN = "open"
    CLOSED = "closed"
    UNSUPPORTED = "unsupported"
    ERROR = "error"
    TIMEOUT = "timeout"

    @classmethod
    def from_flag(cls, is_open: bool) -> "StatusState":
        return cls.OPEN if is_open else cls.CLOSED


@dataclass(frozen=True, slots=True)
class ExchangeStatus:
    """Deposit/withdraw status of one asset on one exchange.

    ``available`` is derived, never stored.
    """

    exchange: str
    deposit: StatusState
    withdraw: StatusState

    @property
    def available(self) -> bool:
        return self.deposit is StatusState.OPEN or self.withdraw is StatusState.OPEN

    @classmethod
    def from_flags(cls, exchange: str, deposit_open: bool, withdraw_open: bool) -> "ExchangeStatus":
        return cls(exchange, StatusState.from_flag(deposit_open), StatusState.from_flag(withdraw_open))

    @classmethod
    def unsupported(cls, exchange: str) -> "ExchangeStatus":
        return cls(exchange, StatusState.UNSUPPORTED, StatusState.UNSUPPORTED)

    @classmethod
    def error(cls, exchange: str) -> "ExchangeStatus":
        return cls(exchange, StatusState.ERROR, StatusState.ERROR)

    @classmethod
    def timeout(cls, exchange: str) -> "ExchangeStatus":
        return cls(exchange, StatusState.TIMEOUT, StatusState.TIMEOUT)

    def to_dict(self) -> dict[str, Any]:
        return {
            "exchange": self.exchange,
            "deposit": self.deposit.value,
            "withdraw": self.withdraw.value,
            "available": self.available,
        }


class ExchangeAdapter(Protocol):
    """Anything that can report an ExchangeStatus for a catalog symbol."""

    slug: str
    name: str
    endpoint: str
    max_attempts: int

    async def fetch_status(self, symbol: str) -> ExchangeStatus:
        """Fetch deposit/withdraw status for *symbol*.

        Args:
            symbol: Canonical catalog symbol (e.g. 'BASE')

        Returns:
            ExchangeStatus; failures are reported as ERROR states, never raised
        """
        ...
