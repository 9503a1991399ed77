"""Catalog symbol to exchange ticker mapping."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# L2s whose gas/settlement asset is ETH are listed by exchanges under ETH.
# MATIC and ZK trade under their own tickers.
SYMBOL_OVERRIDES: Mapping[str, str] = MappingProxyType({
    "MATIC": "MATIC",
    "BASE": "ETH",
    "ZK": "ZK",
    "LINEA": "ETH",
    "SCROLL": "ETH",
})


def normalize_symbol(symbol: str, overrides: Mapping[str, str] = SYMBOL_OVERRIDES) -> str:
    """Return the ticker exchanges list *symbol* under.

    Falls through to the (upper-cased) symbol itself when no override exists:
    - BASE -> ETH
    - BTC -> BTC
    """
    if not symbol:
        return symbol

    canonical = symbol.strip().upper()
    return overrides.get(canonical, canonical)


def symbols_match(listed: object, wanted: str) -> bool:
    """Case-insensitive exact comparison of an exchange ticker against *wanted*."""
    return isinstance(listed, str) and listed.strip().upper() == wanted.upper()
