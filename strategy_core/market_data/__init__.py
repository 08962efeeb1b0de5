"""Market data for strategies: symbol derivation, quotes and price resolution."""

from strategy_core.market_data.price_service import PriceResolver, fallback_prices, resolve_prices
from strategy_core.market_data.quotes_client import QuotesApiClient, QuoteSourceError
from strategy_core.market_data.subscription import PriceSubscription
from strategy_core.market_data.symbols import derive_symbols, is_derivative

__all__ = [
    "PriceResolver",
    "PriceSubscription",
    "QuoteSourceError",
    "QuotesApiClient",
    "derive_symbols",
    "fallback_prices",
    "is_derivative",
    "resolve_prices",
]
