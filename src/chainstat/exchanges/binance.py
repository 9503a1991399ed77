"""Binance exchange adapter."""

from __future__ import annotations

from typing import Any

from .base import BaseExchangeAdapter, MalformedResponse
from .protocol import ExchangeStatus


class BinanceAdapter(BaseExchangeAdapter):
    """Binance public asset-service product listing (no API key needed)."""

    slug = "binance"
    name = "Binance"
    default_base_url = "https://www.binance.com"
    path = "/bapi/asset/v2/public/asset-service/product/get-products"

    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        if not isinstance(body, dict) or "data" not in body:
            raise MalformedResponse("missing 'data'")

        coins = self._require_list(body["data"], "data")
        coin = self._find(coins, "coin", ticker)
        networks = coin.get("networkList") if coin else None

        if not networks:
            return ExchangeStatus.unsupported(self.name)

        return self._union(networks, "depositEnable", "withdrawEnable")
