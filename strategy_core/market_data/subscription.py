"""Keeps a strategy's price map current as its symbol set changes.

Each change of the symbol set starts a resolution pass stamped with a new
generation number. Passes may overlap; a pass commits its result only if its
generation is still the latest one, so the most recent request always wins and
stale results are dropped without being merged. Superseded passes are not
cancelled, only ignored when they finish.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Literal, Optional

from strategy_core.market_data.price_service import PriceResolver
from strategy_core.market_data.symbols import TransactionLike, derive_symbols
from strategy_core.types import PriceMap

logger = logging.getLogger(__name__)

SubscriptionState = Literal["idle", "resolving"]


class PriceSubscription:
    """Generation-stamped price map for one consumer.

    Must be driven from inside a running event loop: ``update`` schedules the
    resolution pass as a task on the current loop.
    """

    def __init__(
        self,
        resolver: Optional[PriceResolver] = None,
        *,
        on_change: Optional[Callable[[PriceMap], None]] = None,
    ) -> None:
        self.resolver = resolver or PriceResolver()
        self.on_change = on_change
        self.prices: PriceMap = {}
        self.generation = 0
        self.state: SubscriptionState = "idle"
        self._symbols: Optional[frozenset[str]] = None
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def symbols(self) -> Optional[frozenset[str]]:
        """Last requested symbol set (``None`` until the first update)."""
        return self._symbols

    @property
    def closed(self) -> bool:
        return self._closed

    def attach(self) -> None:
        """(Re)attach a consumer; the next ``update`` always triggers a pass."""
        self._closed = False
        self._symbols = None

    def update(self, symbols: Iterable[str]) -> None:
        if self._closed:
            return

        requested = frozenset(s for s in symbols if s)
        if self._symbols is not None and requested == self._symbols:
            return
        self._symbols = requested

        self.generation += 1
        if not requested:
            self._commit({})
            return

        self.state = "resolving"
        task = asyncio.get_running_loop().create_task(
            self._resolve(self.generation, sorted(requested))
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Started price pass %d for %d symbol(s)", self.generation, len(requested))

    def update_transactions(self, transactions: Optional[Iterable[TransactionLike]]) -> None:
        self.update(derive_symbols(transactions))

    async def _resolve(self, generation: int, symbols: list[str]) -> None:
        prices = await self.resolver.resolve_prices(symbols)
        if generation != self.generation:
            return
        self._commit(prices)

    def _commit(self, prices: PriceMap) -> None:
        self.prices = prices
        self.state = "idle"
        if self.on_change is not None:
            self.on_change(prices)

    async def wait_idle(self) -> PriceMap:
        """Wait for every in-flight pass to finish and return the committed map."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        return self.prices

    def close(self) -> None:
        """Detach the consumer. In-flight passes finish but never commit."""
        self._closed = True
        self.generation += 1
        self.state = "idle"

    async def aclose(self) -> None:
        self.close()
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
