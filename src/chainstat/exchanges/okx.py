"""OKX exchange adapter."""

from __future__ import annotations

from typing import Any

from .base import BaseExchangeAdapter, MalformedResponse
from .normalization import symbols_match
from .protocol import ExchangeStatus


class OKXAdapter(BaseExchangeAdapter):
    """OKX asset currencies.

    Unlike the other listings, OKX returns one row per (currency, chain),
    so every row with a matching ``ccy`` is a network of the asset.
    """

    slug = "okx"
    name = "OKX"
    default_base_url = "https://www.okx.com"
    path = "/api/v5/asset/currencies"

    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        if not isinstance(body, dict) or "data" not in body:
            raise MalformedResponse("missing 'data'")

        rows = self._require_list(body["data"], "data")
        chains = [row for row in rows if symbols_match(row.get("ccy"), ticker)]

        if not chains:
            return ExchangeStatus.unsupported(self.name)

        return self._union(chains, "canDep", "canWd")
