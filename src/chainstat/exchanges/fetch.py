"""Timeout/retry wrapper around outbound exchange requests."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import aiohttp

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

DEFAULT_TIMEOUT = 10.0
DEFAULT_BACKOFF_STEP = 1.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; chainstat/0.1)"


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Returned in place of a parsed body when a request could not be completed.

    reason is one of 'transport' (timeout, connection error), 'http'
    (non-2xx status) or 'malformed' (body is not JSON).
    """

    reason: str
    detail: str
    attempts: int


class ResilientFetcher:
    """Shared HTTP GET helper with a hard per-call timeout and linear backoff.

    A failed attempt ``n`` sleeps ``n * backoff_step`` seconds before attempt
    ``n + 1``. Non-2xx responses count as failed attempts exactly like
    network errors. Bodies that are not JSON fail immediately since retrying
    would return the same shape.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_step: float = DEFAULT_BACKOFF_STEP,
        user_agent: str = DEFAULT_USER_AGENT,
        sleep: Sleep = asyncio.sleep,
    ):
        self.timeout = timeout
        self.backoff_step = backoff_step
        self.user_agent = user_agent
        self._sleep = sleep
        self.session: aiohttp.ClientSession | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self._get_headers(),
            )
        return self.session

    def _get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    async def _get_once(self, url: str, params: dict[str, str] | None, attempt: int) -> Any | FetchFailure:
        session = await self._ensure_session()
        try:
            async with asyncio.timeout(self.timeout):
                async with session.get(url, params=params) as resp:
                    if not 200 <= resp.status < 300:
                        return FetchFailure("http", f"HTTP {resp.status}", attempt)
                    try:
                        return await resp.json(content_type=None)
                    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                        return FetchFailure("malformed", f"invalid JSON: {exc}", attempt)
        except TimeoutError:
            return FetchFailure("transport", f"timed out after {self.timeout}s", attempt)
        except (aiohttp.ClientError, OSError) as exc:
            return FetchFailure("transport", f"{type(exc).__name__}: {exc}", attempt)

    async def request(
        self,
        url: str,
        *,
        exchange: str,
        asset: str,
        params: dict[str, str] | None = None,
        max_attempts: int = 1,
    ) -> Any | FetchFailure:
        """GET *url* and return the decoded JSON body.

        Args:
            url: Endpoint to query
            exchange: Exchange name, for log context
            asset: Catalog symbol being resolved, for log context
            params: Optional query parameters
            max_attempts: Total attempts; 1 disables retrying

        Returns:
            Parsed JSON body, or a FetchFailure once attempts are exhausted
        """
        attempts = max(1, max_attempts)
        failure = FetchFailure("transport", "no attempt made", 0)

        for attempt in range(1, attempts + 1):
            result = await self._get_once(url, params, attempt)
            if not isinstance(result, FetchFailure):
                return result

            failure = result
            if failure.reason == "malformed":
                break

            if attempt < attempts:
                delay = attempt * self.backoff_step
                logger.warning(
                    "%s request for %s failed (attempt %d/%d): %s; retrying in %.1fs",
                    exchange, asset, attempt, attempts, failure.detail, delay,
                )
                await self._sleep(delay)

        logger.error(
            "%s request for %s failed after %d attempt(s): %s",
            exchange, asset, failure.attempts, failure.detail,
        )
        return failure

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None
