"""Tests for the retrying fetch wrapper."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from chainstat.exchanges.fetch import FetchFailure, ResilientFetcher

from conftest import create_async_response


class TestResilientFetcher:
    @pytest.mark.asyncio
    async def test_success_first_attempt(self, make_fetcher, fake_sleep):
        get = MagicMock(return_value=create_async_response(200, {"ok": True}))
        fetcher = make_fetcher(get)

        body = await fetcher.request("https://x/api", exchange="Gate.io", asset="BTC", max_attempts=3)

        assert body == {"ok": True}
        assert get.call_count == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_fails_twice_then_succeeds(self, make_fetcher, fake_sleep):
        """Two failed attempts sleep 1s then 2s before the third succeeds."""
        get = MagicMock(side_effect=[
            aiohttp.ClientConnectionError("reset"),
            create_async_response(503),
            create_async_response(200, [{"currency": "BTC"}]),
        ])
        fetcher = make_fetcher(get)

        body = await fetcher.request("https://x/api", exchange="Gate.io", asset="BTC", max_attempts=3)

        assert body == [{"currency": "BTC"}]
        assert get.call_count == 3
        assert fake_sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhausted_retries_return_failure(self, make_fetcher, fake_sleep):
        get = MagicMock(side_effect=asyncio.TimeoutError())
        fetcher = make_fetcher(get)

        result = await fetcher.request("https://x/api", exchange="Gate.io", asset="BTC", max_attempts=3)

        assert isinstance(result, FetchFailure)
        assert result.reason == "transport"
        assert result.attempts == 3
        assert get.call_count == 3
        # No sleep after the final attempt
        assert fake_sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_single_attempt_is_terminal(self, make_fetcher, fake_sleep):
        get = MagicMock(return_value=create_async_response(500))
        fetcher = make_fetcher(get)

        result = await fetcher.request("https://x/api", exchange="OKX", asset="BTC")

        assert isinstance(result, FetchFailure)
        assert result.reason == "http"
        assert result.detail == "HTTP 500"
        assert get.call_count == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_zero_attempts_still_tries_once(self, make_fetcher, fake_sleep):
        get = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))
        fetcher = make_fetcher(get)

        result = await fetcher.request("https://x/api", exchange="OKX", asset="BTC", max_attempts=0)

        assert isinstance(result, FetchFailure)
        assert result.attempts == 1
        assert result.reason == "transport"
        assert get.call_count == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_non_2xx_is_retried_like_network_failure(self, make_fetcher, fake_sleep):
        get = MagicMock(side_effect=[
            create_async_response(429),
            create_async_response(200, {"data": []}),
        ])
        fetcher = make_fetcher(get)

        body = await fetcher.request("https://x/api", exchange="Gate.io", asset="ETH", max_attempts=3)

        assert body == {"data": []}
        assert fake_sleep.delays == [1.0]

    @pytest.mark.asyncio
    async def test_malformed_body_not_retried(self, make_fetcher, fake_sleep):
        bad = create_async_response(200, json_error=json.JSONDecodeError("Expecting value", "<html>", 0))
        get = MagicMock(return_value=bad)
        fetcher = make_fetcher(get)

        result = await fetcher.request("https://x/api", exchange="Gate.io", asset="BTC", max_attempts=3)

        assert isinstance(result, FetchFailure)
        assert result.reason == "malformed"
        assert get.call_count == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_hard_timeout_abandons_slow_call(self, make_fetcher):
        async def _hang(*args, **kwargs):
            await asyncio.sleep(5)

        slow = create_async_response(200, {})
        slow.__aenter__ = AsyncMock(side_effect=_hang)
        fetcher = make_fetcher(MagicMock(return_value=slow), timeout=0.05)

        result = await fetcher.request("https://x/api", exchange="Bybit", asset="SOL")

        assert isinstance(result, FetchFailure)
        assert result.reason == "transport"
        assert "timed out" in result.detail

    @pytest.mark.asyncio
    async def test_params_forwarded(self, make_fetcher):
        get = MagicMock(return_value=create_async_response(200, {}))
        fetcher = make_fetcher(get)

        await fetcher.request("https://x/api", exchange="Bybit", asset="SOL", params={"coin": "SOL"})

        get.assert_called_once_with("https://x/api", params={"coin": "SOL"})

    @pytest.mark.asyncio
    async def test_custom_backoff_step(self, make_fetcher, fake_sleep):
        get = MagicMock(side_effect=aiohttp.ClientError("boom"))
        fetcher = make_fetcher(get, backoff_step=0.25)

        await fetcher.request("https://x/api", exchange="Gate.io", asset="BTC", max_attempts=3)

        assert fake_sleep.delays == [0.25, 0.5]

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        fetcher = ResilientFetcher()
        await fetcher.close()
        assert fetcher.session is None
