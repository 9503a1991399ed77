"""Batch orchestration of status lookups across all exchanges."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Iterator, Sequence

from .assembler import AggregationResult, assemble
from .catalog import AssetDescriptor
from .exchanges.protocol import ExchangeAdapter, ExchangeStatus

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_PAUSE = 0.5


def iter_batches(catalog: Sequence[AssetDescriptor], batch_size: int) -> Iterator[Sequence[AssetDescriptor]]:
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    for start in range(0, len(catalog), batch_size):
        yield catalog[start : start + batch_size]


class BatchOrchestrator:
    """Runs every adapter for every catalog asset, one batch at a time.

    Inside a batch all (asset, exchange) lookups run concurrently. Batches
    run strictly in order with an unconditional pause between them (none
    after the last). The run never partially fails: each asset ends up
    with one status per adapter.
    """

    def __init__(
        self,
        adapters: Sequence[ExchangeAdapter],
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_pause: float = DEFAULT_BATCH_PAUSE,
        deadline: float | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.adapters = list(adapters)
        self.batch_size = batch_size
        self.batch_pause = batch_pause
        self.deadline = deadline
        self._sleep = sleep

    @property
    def exchange_names(self) -> list[str]:
        return [adapter.name for adapter in self.adapters]

    async def aggregate(self, catalog: Sequence[AssetDescriptor]) -> AggregationResult:
        catalog = tuple(catalog)
        loop = asyncio.get_running_loop()
        deadline_at = loop.time() + self.deadline if self.deadline else None
        started = time.monotonic()

        batches = list(iter_batches(catalog, self.batch_size))
        statuses: dict[str, dict[str, ExchangeStatus]] = {}

        for index, batch in enumerate(batches, start=1):
            logger.debug(
                "batch %d/%d: %s",
                index, len(batches), ", ".join(asset.symbol for asset in batch),
            )
            statuses.update(await self._run_batch(batch, deadline_at))

            if index == len(batches):
                break
            if deadline_at is not None and loop.time() >= deadline_at:
                continue
            await self._sleep(self.batch_pause)

        result = assemble(catalog, statuses, self.exchange_names)
        logger.info(
            "aggregated %d asset(s) across %d exchange(s) in %d batch(es), %.2fs",
            result.count, len(self.adapters), len(batches), time.monotonic() - started,
        )
        return result

    async def _run_batch(
        self,
        batch: Sequence[AssetDescriptor],
        deadline_at: float | None,
    ) -> dict[str, dict[str, ExchangeStatus]]:
        tasks: dict[str, dict[str, asyncio.Task[ExchangeStatus]]] = {}

        async with asyncio.TaskGroup() as tg:
            for asset in batch:
                tasks[asset.symbol] = {
                    adapter.name: tg.create_task(self._fetch_one(adapter, asset, deadline_at))
                    for adapter in self.adapters
                }

        return {
            symbol: {name: task.result() for name, task in per_exchange.items()}
            for symbol, per_exchange in tasks.items()
        }

    async def _fetch_one(
        self,
        adapter: ExchangeAdapter,
        asset: AssetDescriptor,
        deadline_at: float | None,
    ) -> ExchangeStatus:
        try:
            if deadline_at is None:
                return await adapter.fetch_status(asset.symbol)
            return await self._fetch_before(adapter, asset, deadline_at)
        except Exception:
            # Adapters are not supposed to raise; keep the row complete anyway
            logger.exception("%s adapter raised for %s", adapter.name, asset.symbol)
            return ExchangeStatus.error(adapter.name)

    async def _fetch_before(
        self,
        adapter: ExchangeAdapter,
        asset: AssetDescriptor,
        deadline_at: float,
    ) -> ExchangeStatus:
        remaining = deadline_at - asyncio.get_running_loop().time()
        if remaining <= 0:
            logger.warning("deadline passed before %s lookup for %s", adapter.name, asset.symbol)
            return ExchangeStatus.timeout(adapter.name)

        try:
            async with asyncio.timeout(remaining):
                return await adapter.fetch_status(asset.symbol)
        except TimeoutError:
            logger.warning("deadline hit during %s lookup for %s", adapter.name, asset.symbol)
            return ExchangeStatus.timeout(adapter.name)
