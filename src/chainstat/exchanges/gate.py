"""Gate.io exchange adapter."""

from __future__ import annotations

from typing import Any

from .base import BaseExchangeAdapter
from .protocol import ExchangeStatus


class GateAdapter(BaseExchangeAdapter):
    """Gate.io spot currency listing.

    Flags are negative (``deposit_disabled``) and a delayed withdrawal counts
    as closed. Newer payloads carry a per-chain ``chains`` list; older ones
    only have currency-level flags, which then act as the single network.
    """

    slug = "gate"
    name = "Gate.io"
    default_base_url = "https://api.gateio.ws"
    path = "/api/v4/spot/currencies"
    default_max_attempts = 3

    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        currencies = self._require_list(body, "currencies")
        currency = self._find(currencies, "currency", ticker)

        if currency is None or currency.get("delisted") or currency.get("trade_disabled"):
            return ExchangeStatus.unsupported(self.name)

        chains = currency.get("chains") or [currency]
        deposit_open = any(not chain.get("deposit_disabled") for chain in chains)
        withdraw_open = any(
            not (chain.get("withdraw_disabled") or chain.get("withdraw_delayed"))
            for chain in chains
        )
        return ExchangeStatus.from_flags(self.name, deposit_open, withdraw_open)
