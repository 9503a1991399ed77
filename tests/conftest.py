"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from chainstat.catalog import AssetDescriptor, Category
from chainstat.exchanges.fetch import ResilientFetcher


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self, events=None):
        self.delays = []
        self.events = events

    async def __call__(self, delay):
        self.delays.append(delay)
        if self.events is not None:
            self.events.append(("pause", delay))


def create_async_response(status=200, json_data=None, json_error=None):
    """Create a mock aiohttp response usable with ``async with``."""
    resp = AsyncMock()
    resp.status = status
    if json_error is not None:
        resp.json = AsyncMock(side_effect=json_error)
    else:
        resp.json = AsyncMock(return_value=json_data)
    resp.__aenter__ = AsyncMock(return_value=resp)
    resp.__aexit__ = AsyncMock(return_value=None)
    return resp


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def make_fetcher(fake_sleep):
    """Build a fetcher whose session is a MagicMock with the given ``get``."""

    def _make(get, **kwargs):
        fetcher = ResilientFetcher(sleep=fake_sleep, **kwargs)
        session = MagicMock()
        session.get = get if isinstance(get, MagicMock) else MagicMock(side_effect=get)
        fetcher._ensure_session = AsyncMock(return_value=session)
        return fetcher

    return _make


@pytest.fixture
def btc():
    return AssetDescriptor("Bitcoin", "BTC", Category.UTXO, "https://blockchair.com/bitcoin")


@pytest.fixture
def base_l2():
    return AssetDescriptor("Base", "BASE", Category.EVM_L2, "https://basescan.org")


@pytest.fixture
def gate_currencies():
    """Gate.io spot currencies: BTC delisted, ETH deposit-only on one chain."""
    return [
        {
            "currency": "BTC",
            "delisted": True,
            "withdraw_disabled": False,
            "withdraw_delayed": False,
            "deposit_disabled": False,
            "trade_disabled": False,
        },
        {
            "currency": "ETH",
            "delisted": False,
            "withdraw_disabled": False,
            "withdraw_delayed": False,
            "deposit_disabled": False,
            "trade_disabled": False,
            "chains": [
                {"name": "ETH", "deposit_disabled": False, "withdraw_disabled": True, "withdraw_delayed": False},
            ],
        },
    ]


@pytest.fixture
def binance_products():
    return {
        "data": [
            {
                "coin": "USDT",
                "networkList": [
                    {"network": "ETH", "depositEnable": False, "withdrawEnable": False},
                    {"network": "TRX", "depositEnable": True, "withdrawEnable": False},
                    {"network": "BSC", "depositEnable": False, "withdrawEnable": False},
                ],
            },
            {
                "coin": "ETH",
                "networkList": [
                    {"network": "ETH", "depositEnable": True, "withdrawEnable": True},
                ],
            },
            {"coin": "DEAD", "networkList": []},
        ]
    }
