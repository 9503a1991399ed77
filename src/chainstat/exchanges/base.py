"""Base class for exchange status adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping

from .fetch import FetchFailure, ResilientFetcher
from .normalization import normalize_symbol, symbols_match
from .protocol import ExchangeStatus

logger = logging.getLogger(__name__)


class MalformedResponse(ValueError):
    """Raised by an adapter's reduce step when the payload shape is unexpected."""


class BaseExchangeAdapter(ABC):
    """Base class for all exchange adapters.

    Subclasses declare where the currency listing lives and implement
    ``reduce``, the only place that knows the exchange's payload shape.
    Everything else (symbol mapping, fetching, failure translation) is
    shared and never raises.
    """

    slug: str = ""
    name: str = ""
    default_base_url: str = ""
    path: str = ""
    default_max_attempts: int = 1

    def __init__(
        self,
        fetcher: ResilientFetcher,
        *,
        base_url: str | None = None,
        max_attempts: int | None = None,
    ):
        """Initialize exchange adapter.

        Args:
            fetcher: Shared fetch wrapper used for every request
            base_url: Override of the public API host (testing, mirrors)
            max_attempts: Total attempts per request; defaults per exchange
        """
        self.fetcher = fetcher
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.max_attempts = max_attempts or self.default_max_attempts

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{self.path}"

    def request_params(self, ticker: str) -> dict[str, str] | None:
        """Query parameters for the listing request; most endpoints take none."""
        return None

    async def fetch_status(self, symbol: str) -> ExchangeStatus:
        ticker = normalize_symbol(symbol)
        if ticker != symbol.upper():
            logger.debug("%s: querying %s as %s", self.name, symbol, ticker)

        body = await self.fetcher.request(
            self.endpoint,
            exchange=self.name,
            asset=symbol,
            params=self.request_params(ticker),
            max_attempts=self.max_attempts,
        )
        if isinstance(body, FetchFailure):
            return ExchangeStatus.error(self.name)

        try:
            return self.reduce(body, ticker)
        except (MalformedResponse, KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.warning("%s returned an unexpected payload for %s: %s", self.name, symbol, exc)
            return ExchangeStatus.error(self.name)

    @abstractmethod
    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        """Locate *ticker* in *body* and collapse its networks into one status."""
        ...

    # Helpers shared by reduce implementations

    def _require_list(self, value: Any, what: str) -> list[Any]:
        if not isinstance(value, list):
            raise MalformedResponse(f"expected a list for {what}, got {type(value).__name__}")
        return value

    def _find(self, entries: Iterable[Mapping[str, Any]], key: str, ticker: str) -> Mapping[str, Any] | None:
        for entry in entries:
            if symbols_match(entry.get(key), ticker):
                return entry
        return None

    def _union(self, networks: Iterable[Mapping[str, Any]], deposit_key: str, withdraw_key: str, is_enabled: Callable[[Any], bool] = bool) -> ExchangeStatus:
        """Deposit/withdraw open when any network allows it."""
        networks = list(networks)
        return ExchangeStatus.from_flags(
            self.name,
            any(is_enabled(n.get(deposit_key)) for n in networks),
            any(is_enabled(n.get(withdraw_key)) for n in networks),
        )
