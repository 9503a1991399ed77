"""Join catalog entries with their per-exchange statuses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from .catalog import AssetDescriptor
from .exchanges.protocol import ExchangeStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AggregatedAsset:
    """Catalog entry plus exactly one status per configured exchange."""

    asset: AssetDescriptor
    exchanges: Mapping[str, ExchangeStatus]

    def to_dict(self) -> dict[str, Any]:
        data = self.asset.to_dict()
        data["exchanges"] = {name: status.to_dict() for name, status in self.exchanges.items()}
        return data


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """One aggregation run, in catalog order."""

    assets: tuple[AggregatedAsset, ...]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    success: bool = True

    @property
    def count(self) -> int:
        return len(self.assets)

    def to_payload(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "data": [asset.to_dict() for asset in self.assets],
            "timestamp": format_timestamp(self.timestamp),
            "count": self.count,
        }


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def assemble(
    catalog: Iterable[AssetDescriptor],
    statuses: Mapping[str, Mapping[str, ExchangeStatus]],
    exchanges: Sequence[str],
    *,
    generated_at: datetime | None = None,
    success: bool = True,
) -> AggregationResult:
    """Build an AggregationResult from per-symbol status mappings.

    Args:
        catalog: Assets in the order they should appear
        statuses: symbol -> exchange name -> status
        exchanges: Configured exchange names; every asset gets exactly these keys
        generated_at: Timestamp to stamp (defaults to now, UTC)
        success: Success flag carried into the payload

    Returns:
        AggregationResult; a missing status is filled with an ERROR entry
        rather than dropped
    """
    assembled: list[AggregatedAsset] = []

    for asset in catalog:
        per_exchange = statuses.get(asset.symbol, {})
        row: dict[str, ExchangeStatus] = {}
        for name in exchanges:
            status = per_exchange.get(name)
            if status is None:
                logger.warning("No %s status collected for %s; reporting error", name, asset.symbol)
                status = ExchangeStatus.error(name)
            row[name] = status
        assembled.append(AggregatedAsset(asset=asset, exchanges=row))

    return AggregationResult(
        assets=tuple(assembled),
        timestamp=generated_at or datetime.now(timezone.utc),
        success=success,
    )
