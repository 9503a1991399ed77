"""chainstat: deposit/withdraw status across centralized exchanges."""

from .settings import Settings
from .catalog import CATALOG, AssetDescriptor, Category
from .exchanges import ExchangeStatus, StatusState, normalize_symbol
from .aggregator import BatchOrchestrator
from .assembler import AggregatedAsset, AggregationResult

__all__ = [
    "Settings",
    "CATALOG",
    "AssetDescriptor",
    "Category",
    "ExchangeStatus",
    "StatusState",
    "normalize_symbol",
    "BatchOrchestrator",
    "AggregatedAsset",
    "AggregationResult",
]
