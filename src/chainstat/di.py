from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from .aggregator import BatchOrchestrator
from .catalog import CATALOG, AssetDescriptor
from .exchanges.fetch import ResilientFetcher
from .exchanges.init import create_adapters_from_settings, create_fetcher_from_settings
from .exchanges.protocol import ExchangeAdapter

if TYPE_CHECKING:
    from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppContainer:
    settings: "Settings"
    fetcher: ResilientFetcher
    orchestrator: BatchOrchestrator
    catalog: tuple[AssetDescriptor, ...] = CATALOG
    adapters: list[ExchangeAdapter] = field(default_factory=list)

    async def close(self) -> None:
        await self.fetcher.close()


def build_container(
    settings: "Settings",
    adapters: Sequence[ExchangeAdapter] | None = None,
    *,
    fetcher: ResilientFetcher | None = None,
    catalog: tuple[AssetDescriptor, ...] = CATALOG,
) -> AppContainer:
    """Wire fetcher, adapters and orchestrator from settings."""
    logger.debug("settings=%s", settings.redacted())

    fetcher = fetcher or create_fetcher_from_settings(settings)
    if adapters is None:
        adapters = create_adapters_from_settings(settings, fetcher)

    agg = settings.aggregation
    orchestrator = BatchOrchestrator(
        adapters,
        batch_size=agg.batch_size,
        batch_pause=agg.batch_pause,
        deadline=agg.deadline,
    )
    return AppContainer(
        settings=settings,
        fetcher=fetcher,
        orchestrator=orchestrator,
        catalog=catalog,
        adapters=list(adapters),
    )
