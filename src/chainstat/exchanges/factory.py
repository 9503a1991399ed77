"""Factory for creating exchange adapter instances."""

from __future__ import annotations

from typing import Any, Type

from .base import BaseExchangeAdapter
from .binance import BinanceAdapter
from .bitget import BitgetAdapter
from .bybit import BybitAdapter
from .fetch import ResilientFetcher
from .gate import GateAdapter
from .mexc import MEXCAdapter
from .okx import OKXAdapter

# Registry order is the column order of every aggregated asset.
EXCHANGE_ADAPTERS: dict[str, Type[BaseExchangeAdapter]] = {
    "gate": GateAdapter,
    "binance": BinanceAdapter,
    "okx": OKXAdapter,
    "bybit": BybitAdapter,
    "bitget": BitgetAdapter,
    "mexc": MEXCAdapter,
}


def create_exchange_adapter(
    exchange: str,
    fetcher: ResilientFetcher,
    *,
    base_url: str | None = None,
    max_attempts: int | None = None,
) -> BaseExchangeAdapter:
    """Create an exchange adapter instance.

    Args:
        exchange: Exchange slug (gate, binance, okx, bybit, bitget, mexc)
        fetcher: Shared fetch wrapper
        base_url: Optional API host override
        max_attempts: Optional override of the exchange's retry policy

    Returns:
        Configured exchange adapter

    Raises:
        ValueError: If exchange is not supported
    """
    exchange_lower = exchange.lower()

    if exchange_lower not in EXCHANGE_ADAPTERS:
        supported = ", ".join(EXCHANGE_ADAPTERS.keys())
        raise ValueError(
            f"Unsupported exchange: {exchange}. Supported exchanges: {supported}"
        )

    adapter_class = EXCHANGE_ADAPTERS[exchange_lower]

    kwargs: dict[str, Any] = {}
    if base_url is not None:
        kwargs["base_url"] = base_url
    if max_attempts is not None:
        kwargs["max_attempts"] = max_attempts

    return adapter_class(fetcher, **kwargs)
