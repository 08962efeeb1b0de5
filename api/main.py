"""FastAPI application for strategy inputs and price resolution.

Endpoints:
- GET /health - Liveness check
- POST /strategy/inputs - Pipeline inputs with effective values
- POST /strategy/prices - Current prices for a strategy's stock/ETF symbols

Environment:
- QUOTES_API_BASE_URL, QUOTES_API_USER_ID, QUOTES_API_TIMEOUT
- No authentication (local network only)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI

from api.routes import strategy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    resolver = strategy._resolver  # noqa: SLF001
    if resolver is not None and hasattr(resolver.source, "aclose"):
        await resolver.source.aclose()
        logger.info("Quotes API client closed")


app = FastAPI(
    title="Strategy Core API",
    description="Pipeline input discovery and price resolution for strategies",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(strategy.router)


@app.get("/health")
async def health() -> dict[str, Any]:
    return {"status": "ok"}
