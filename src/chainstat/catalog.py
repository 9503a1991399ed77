"""Static asset catalog queried on every aggregation run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class Category(Enum):
    """Chain family used to group assets in the catalog."""

    UTXO = "UTXO"
    EVM = "EVM"
    EVM_L2 = "EVM L2"
    NON_EVM = "Non-EVM"

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Accept either the value (``EVM L2``) or a loose spelling (``evm-l2``)."""
        wanted = value.strip().lower().replace("-", " ").replace("_", " ")
        for member in cls:
            if member.value.lower().replace("-", " ") == wanted:
                return member
        raise ValueError(f"Unknown category: {value}")


@dataclass(frozen=True, slots=True)
class AssetDescriptor:
    """Immutable catalog entry."""

    name: str
    symbol: str
    category: Category
    explorer: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "category": self.category.value,
            "explorer": self.explorer,
        }


def _asset(name: str, symbol: str, category: Category, explorer: str) -> AssetDescriptor:
    return AssetDescriptor(name=name, symbol=symbol, category=category, explorer=explorer)


CATALOG: tuple[AssetDescriptor, ...] = (
    _asset("Bitcoin", "BTC", Category.UTXO, "https://blockchair.com/bitcoin"),
    _asset("Litecoin", "LTC", Category.UTXO, "https://blockchair.com/litecoin"),
    _asset("Dogecoin", "DOGE", Category.UTXO, "https://blockchair.com/dogecoin"),
    _asset("Bitcoin Cash", "BCH", Category.UTXO, "https://blockchair.com/bitcoin-cash"),

    _asset("Ethereum", "ETH", Category.EVM, "https://etherscan.io"),
    _asset("BNB Smart Chain", "BNB", Category.EVM, "https://bscscan.com"),
    _asset("Avalanche", "AVAX", Category.EVM, "https://snowtrace.io"),
    _asset("Fantom", "FTM", Category.EVM, "https://ftmscan.com"),
    _asset("Cronos", "CRO", Category.EVM, "https://cronoscan.com"),

    _asset("Polygon", "MATIC", Category.EVM_L2, "https://polygonscan.com"),
    _asset("Arbitrum", "ARB", Category.EVM_L2, "https://arbiscan.io"),
    _asset("Optimism", "OP", Category.EVM_L2, "https://optimistic.etherscan.io"),
    _asset("Base", "BASE", Category.EVM_L2, "https://basescan.org"),
    _asset("zkSync Era", "ZK", Category.EVM_L2, "https://explorer.zksync.io"),
    _asset("Linea", "LINEA", Category.EVM_L2, "https://lineascan.build"),
    _asset("Scroll", "SCROLL", Category.EVM_L2, "https://scrollscan.com"),

    _asset("Solana", "SOL", Category.NON_EVM, "https://solscan.io"),
    _asset("Tron", "TRX", Category.NON_EVM, "https://tronscan.org"),
    _asset("Ripple", "XRP", Category.NON_EVM, "https://xrpscan.com"),
    _asset("Cardano", "ADA", Category.NON_EVM, "https://cardanoscan.io"),
    _asset("Polkadot", "DOT", Category.NON_EVM, "https://polkadot.subscan.io"),
    _asset("Cosmos", "ATOM", Category.NON_EVM, "https://www.mintscan.io/cosmos"),
    _asset("Sui", "SUI", Category.NON_EVM, "https://suiscan.xyz"),
    _asset("Aptos", "APT", Category.NON_EVM, "https://aptoscan.com"),
    _asset("TON", "TON", Category.NON_EVM, "https://tonscan.org"),
    _asset("Near", "NEAR", Category.NON_EVM, "https://nearblocks.io"),
    _asset("Algorand", "ALGO", Category.NON_EVM, "https://algoexplorer.io"),
    _asset("Stellar", "XLM", Category.NON_EVM, "https://stellarchain.io"),
    _asset("EOS", "EOS", Category.NON_EVM, "https://bloks.io"),
    _asset("Tezos", "XTZ", Category.NON_EVM, "https://tzstats.com"),
)


def filter_catalog(
    catalog: Iterable[AssetDescriptor],
    category: Category | None = None,
    search: str | None = None,
) -> tuple[AssetDescriptor, ...]:
    """Subset of *catalog* by category and/or a name/symbol substring.

    Catalog order is preserved.
    """
    needle = search.strip().lower() if search else ""
    selected = []
    for asset in catalog:
        if category is not None and asset.category is not category:
            continue
        if needle and needle not in asset.name.lower() and needle not in asset.symbol.lower():
            continue
        selected.append(asset)
    return tuple(selected)
