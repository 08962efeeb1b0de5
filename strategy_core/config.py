from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_QUOTES_API_BASE_URL = "http://localhost:3000/api"
DEFAULT_QUOTES_API_USER_ID = "default-user"
DEFAULT_QUOTES_API_TIMEOUT = 10.0  # seconds

_REFERENCE_PRICES = MappingProxyType(
    {
        "AAPL": 185.5,
        "MSFT": 420.0,
        "VOO": 405.0,
        "SPY": 485.0,
    }
)


@dataclass(frozen=True)
class FallbackPriceTable:
    """Reference prices used when the quote source is unavailable."""

    prices: Mapping[str, float] = field(default_factory=lambda: _REFERENCE_PRICES)
    default_price: float = 100.0

    def price_for(self, symbol: str) -> float:
        return self.prices.get(symbol, self.default_price)


DEFAULT_FALLBACK_TABLE = FallbackPriceTable()


@dataclass(frozen=True)
class QuoteSourceConfig:
    """Connection settings for the market-data quotes API.

    Read from the environment via ``from_env``:

    - QUOTES_API_BASE_URL (default: http://localhost:3000/api)
    - QUOTES_API_USER_ID  (sent as X-User-Id)
    - QUOTES_API_TIMEOUT  (seconds)
    """

    base_url: str = DEFAULT_QUOTES_API_BASE_URL
    user_id: str = DEFAULT_QUOTES_API_USER_ID
    timeout_seconds: float = DEFAULT_QUOTES_API_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "QuoteSourceConfig":
        env = os.environ if environ is None else environ

        base_url = env.get("QUOTES_API_BASE_URL", "").strip() or DEFAULT_QUOTES_API_BASE_URL
        user_id = env.get("QUOTES_API_USER_ID", "").strip() or DEFAULT_QUOTES_API_USER_ID

        raw_timeout = env.get("QUOTES_API_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(f"QUOTES_API_TIMEOUT must be a number, got {raw_timeout!r}") from exc
            if timeout <= 0:
                raise ValueError(f"QUOTES_API_TIMEOUT must be positive, got {timeout}")
        else:
            timeout = DEFAULT_QUOTES_API_TIMEOUT

        return cls(base_url=base_url.rstrip("/"), user_id=user_id, timeout_seconds=timeout)
