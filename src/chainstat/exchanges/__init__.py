"""Exchange adapters and the fetch layer they share."""

from .protocol import ExchangeAdapter, ExchangeStatus, StatusState
from .normalization import SYMBOL_OVERRIDES, normalize_symbol
from .fetch import FetchFailure, ResilientFetcher
from .base import BaseExchangeAdapter, MalformedResponse
from .factory import EXCHANGE_ADAPTERS, create_exchange_adapter

__all__ = [
    "ExchangeAdapter",
    "ExchangeStatus",
    "StatusState",
    "SYMBOL_OVERRIDES",
    "normalize_symbol",
    "FetchFailure",
    "ResilientFetcher",
    "BaseExchangeAdapter",
    "MalformedResponse",
    "EXCHANGE_ADAPTERS",
    "create_exchange_adapter",
]
