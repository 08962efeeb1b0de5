from __future__ import annotations

from typing import Protocol, Sequence

from strategy_core.types import Quote


class QuoteSource(Protocol):
    """Fetches current quotes for a batch of symbols in one request."""

    async def get_quotes(self, symbols: Sequence[str]) -> Sequence[Quote]:
        raise NotImplementedError
