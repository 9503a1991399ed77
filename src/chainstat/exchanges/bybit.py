"""Bybit exchange adapter."""

from __future__ import annotations

from typing import Any

from .base import BaseExchangeAdapter, MalformedResponse
from .protocol import ExchangeStatus


def _is_on(flag: Any) -> bool:
    # Bybit encodes chain switches as "1"/"0" strings
    return str(flag).strip() == "1"


class BybitAdapter(BaseExchangeAdapter):
    """Bybit v5 coin info, queried per coin."""

    slug = "bybit"
    name = "Bybit"
    default_base_url = "https://api.bybit.com"
    path = "/v5/asset/coin/query-info"

    def request_params(self, ticker: str) -> dict[str, str]:
        return {"coin": ticker}

    def reduce(self, body: Any, ticker: str) -> ExchangeStatus:
        if not isinstance(body, dict):
            raise MalformedResponse(f"expected an object, got {type(body).__name__}")

        result = body.get("result") or {}
        rows = result.get("rows") or []
        coin = self._find(rows, "coin", ticker)
        chains = coin.get("chains") if coin else None

        if not chains:
            return ExchangeStatus.unsupported(self.name)

        return self._union(chains, "chainDeposit", "chainWithdraw", is_enabled=_is_on)
