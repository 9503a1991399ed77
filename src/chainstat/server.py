"""FastAPI application exposing the aggregated chain status."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .di import AppContainer

logger = logging.getLogger(__name__)

STATUS_PATH = "/api/chain-status"


def cache_control(container: AppContainer) -> str:
    server = container.settings.server
    return (
        f"public, s-maxage={server.cache_max_age}, "
        f"stale-while-revalidate={server.stale_while_revalidate}"
    )


def create_app(container: AppContainer) -> FastAPI:
    """Build the HTTP app around an already-wired container."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("chain status service starting (%d exchange(s))", len(container.adapters))
        try:
            yield
        finally:
            await container.close()
            logger.info("chain status service stopped")

    app = FastAPI(title="chainstat", lifespan=lifespan)
    app.state.container = container

    @app.get(STATUS_PATH)
    async def chain_status() -> JSONResponse:
        try:
            result = await container.orchestrator.aggregate(container.catalog)
        except Exception as exc:
            logger.exception("chain status aggregation failed")
            return JSONResponse(
                {
                    "success": False,
                    "error": "Failed to fetch chain status",
                    "message": str(exc) or type(exc).__name__,
                },
                status_code=500,
            )

        return JSONResponse(
            result.to_payload(),
            headers={"Cache-Control": cache_control(container)},
        )

    @app.get("/healthz")
    async def healthz() -> dict[str, Any]:
        return {"status": "ok"}

    return app
