"""MEXC exchange adapter."""

from __future__ import annotations

from typing import Any

from .base import BaseExchangeAdapter
from .protocol import ExchangeStatus


class MEXCAdapter(BaseExchangeAdapter):
    """MEXC capital config; the body is a bare list of coins."""

    slug = "mexc"
    name = "MEXC"
    default_base_url = "https://api.mexc.com"
    path = "/api/v3/capital/config/getall"

    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        coins = self._require_list(body, "capital config")
        coin = self._find(coins, "coin", ticker)
        networks = coin.get("networkList") if coin else None

        if not networks:
            return ExchangeStatus.unsupported(self.name)

        return self._union(networks, "depositEnable", "withdrawEnable")
