"""Client for the strategy backend's market-data quotes endpoint.

GET {base_url}/market-data/quotes?symbols=AAPL,VOO

The backend returns an object keyed by symbol; each value carries at least
``symbol`` and ``price``. Quotes are cached server-side, so callers should
batch symbols into a single request rather than polling per symbol.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Sequence

import httpx

from strategy_core.config import QuoteSourceConfig
from strategy_core.types import Quote

logger = logging.getLogger(__name__)


class QuoteSourceError(RuntimeError):
    """Quote request failed: transport error, timeout, bad status or bad payload."""


def _optional_float(raw: Mapping[str, Any], key: str) -> Optional[float]:
    value = raw.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_quote(raw: Any) -> Quote:
    """Parse one quote entry, raising ``QuoteSourceError`` if it is unusable."""
    if not isinstance(raw, Mapping):
        raise QuoteSourceError(f"Unexpected quote entry: {type(raw).__name__}")

    symbol = raw.get("symbol")
    if not isinstance(symbol, str) or not symbol:
        raise QuoteSourceError(f"Quote entry missing symbol: {raw!r}")

    price = raw.get("price")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise QuoteSourceError(f"Quote for {symbol} has non-numeric price: {price!r}")
    if not math.isfinite(price):
        raise QuoteSourceError(f"Quote for {symbol} has non-finite price: {price!r}")
    if price < 0:
        raise QuoteSourceError(f"Quote for {symbol} has negative price: {price}")

    return Quote(
        symbol=symbol,
        price=float(price),
        previous_close=_optional_float(raw, "previousClose"),
        change=_optional_float(raw, "change"),
        change_percent=_optional_float(raw, "changePercent"),
    )


def parse_quotes_payload(payload: Any) -> list[Quote]:
    if isinstance(payload, Mapping):
        entries = list(payload.values())
    elif isinstance(payload, list):
        entries = payload
    else:
        raise QuoteSourceError(f"Unexpected response format: {type(payload).__name__}")
    return [parse_quote(entry) for entry in entries]


class QuotesApiClient:
    """Async client for the quotes endpoint (one batched request per call)."""

    def __init__(
        self,
        config: Optional[QuoteSourceConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or QuoteSourceConfig.from_env()
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers={
                    "Accept": "application/json",
                    "X-User-Id": self.config.user_id,
                },
                timeout=httpx.Timeout(self.config.timeout_seconds),
            )
        return self._client

    async def get_quotes(self, symbols: Sequence[str]) -> list[Quote]:
        """Fetch quotes for ``symbols``.

        Raises:
            QuoteSourceError: on any transport, status or decoding failure.
        """
        if not symbols:
            return []

        client = self._get_client()
        try:
            response = await client.get("/market-data/quotes", params={"symbols": ",".join(symbols)})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise QuoteSourceError(
                f"Quotes request failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise QuoteSourceError(f"Quotes request failed: {exc.__class__.__name__}: {exc}") from exc
        except ValueError as exc:
            raise QuoteSourceError(f"Quotes response is not valid JSON: {exc}") from exc

        quotes = parse_quotes_payload(payload)
        logger.debug("Fetched %d quote(s) for %d symbol(s)", len(quotes), len(symbols))
        return quotes

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "QuotesApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.aclose()
        return False
