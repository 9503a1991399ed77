"""Exchange adapter initialization from settings."""

from __future__ import annotations

import logging

from ..settings import Settings
from .base import BaseExchangeAdapter
from .factory import EXCHANGE_ADAPTERS, create_exchange_adapter
from .fetch import ResilientFetcher

logger = logging.getLogger(__name__)


def create_fetcher_from_settings(settings: Settings) -> ResilientFetcher:
    return ResilientFetcher(
        timeout=settings.fetch.timeout,
        backoff_step=settings.fetch.backoff_step,
        user_agent=settings.fetch.user_agent,
    )


def create_adapters_from_settings(settings: Settings, fetcher: ResilientFetcher) -> list[BaseExchangeAdapter]:
    """Create the enabled adapters, in registry order."""
    unknown = set(settings.exchanges) - set(EXCHANGE_ADAPTERS)
    if unknown:
        supported = ", ".join(EXCHANGE_ADAPTERS.keys())
        raise ValueError(
            f"Unsupported exchange(s) in config: {', '.join(sorted(unknown))}. Supported exchanges: {supported}"
        )

    adapters: list[BaseExchangeAdapter] = []

    for slug in EXCHANGE_ADAPTERS:
        exchange_config = settings.exchange(slug)
        if not exchange_config.enabled:
            logger.debug("Exchange %s is disabled, skipping", slug)
            continue

        adapter = create_exchange_adapter(
            slug,
            fetcher,
            base_url=exchange_config.base_url,
            max_attempts=exchange_config.max_attempts,
        )
        adapters.append(adapter)
        logger.debug(
            "Initialized %s adapter (%s, %d attempt(s))",
            adapter.name, adapter.endpoint, adapter.max_attempts,
        )

    if not adapters:
        logger.warning("No exchanges enabled; results will carry no exchange columns")

    return adapters
