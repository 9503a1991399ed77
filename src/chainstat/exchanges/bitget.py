"""Bitget exchange adapter."""

from __future__ import annotations

from typing import Any

from .base import BaseExchangeAdapter, MalformedResponse
from .protocol import ExchangeStatus


def _is_true(flag: Any) -> bool:
    """Bitget sends booleans either as JSON booleans or as "true"/"false"."""
    if isinstance(flag, str):
        return flag.strip().lower() == "true"
    return flag is True


class BitgetAdapter(BaseExchangeAdapter):
    """Bitget v2 public spot coins."""

    slug = "bitget"
    name = "Bitget"
    default_base_url = "https://api.bitget.com"
    path = "/api/v2/spot/public/coins"

    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        if not isinstance(body, dict) or "data" not in body:
            raise MalformedResponse("missing 'data'")

        coins = self._require_list(body["data"], "data")
        coin = self._find(coins, "coin", ticker)
        chains = coin.get("chains") if coin else None

        if not chains:
            return ExchangeStatus.unsupported(self.name)

        return self._union(chains, "rechargeable", "withdrawable", is_enabled=_is_true)
