"""Current-price resolution for stock/ETF symbols.

Resolution is fail-soft: the caller always gets a price map. When the quote
source fails the map is filled from a ``FallbackPriceTable`` instead, and the
result does not say which prices are live and which are reference values.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from strategy_core.config import DEFAULT_FALLBACK_TABLE, FallbackPriceTable
from strategy_core.market_data.interfaces import QuoteSource
from strategy_core.types import PriceMap, Quote

logger = logging.getLogger(__name__)


def normalize_symbols(symbols: Optional[Iterable[Optional[str]]]) -> list[str]:
    """Dedupe (first occurrence wins) and drop empty entries."""
    seen: dict[str, None] = {}
    for symbol in symbols or ():
        if symbol:
            seen.setdefault(symbol, None)
    return list(seen)


def fallback_prices(symbols: Sequence[str], table: FallbackPriceTable = DEFAULT_FALLBACK_TABLE) -> PriceMap:
    """Reference price for known symbols, the table default for the rest."""
    return {symbol: table.price_for(symbol) for symbol in symbols}


def _price_map(quotes: Sequence[Quote]) -> PriceMap:
    prices: PriceMap = {}
    for quote in quotes:
        if not quote.symbol:
            raise ValueError("Quote without symbol")
        if not math.isfinite(quote.price):
            raise ValueError(f"Non-finite price for {quote.symbol}: {quote.price!r}")
        if quote.price < 0:
            raise ValueError(f"Negative price for {quote.symbol}: {quote.price}")
        prices[quote.symbol] = float(quote.price)
    return prices


class PriceResolver:
    """Resolves a price map with one batched quote request per pass."""

    def __init__(
        self,
        source: Optional[QuoteSource] = None,
        *,
        fallback_table: FallbackPriceTable = DEFAULT_FALLBACK_TABLE,
    ) -> None:
        self.source = source
        self.fallback_table = fallback_table

    async def resolve_prices(self, symbols: Optional[Iterable[Optional[str]]]) -> PriceMap:
        unique = normalize_symbols(symbols)
        if not unique:
            return {}

        if self.source is None:
            logger.debug("No quote source configured, using reference prices for %s", unique)
            return fallback_prices(unique, self.fallback_table)

        try:
            quotes = await self.source.get_quotes(unique)
            return _price_map(quotes)
        except Exception as exc:
            logger.warning(
                "Quote source failed for %s, using reference prices: %s: %s",
                ",".join(unique),
                exc.__class__.__name__,
                exc,
            )
            return fallback_prices(unique, self.fallback_table)


async def resolve_prices(
    symbols: Optional[Iterable[Optional[str]]],
    source: Optional[QuoteSource] = None,
    table: FallbackPriceTable = DEFAULT_FALLBACK_TABLE,
) -> PriceMap:
    """Convenience wrapper around ``PriceResolver.resolve_prices``."""
    return await PriceResolver(source, fallback_table=table).resolve_prices(symbols)
