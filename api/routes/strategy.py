"""Strategy inputs and price resolution endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, model_validator

from strategy_core.config import QuoteSourceConfig
from strategy_core.market_data.price_service import PriceResolver
from strategy_core.market_data.quotes_client import QuotesApiClient
from strategy_core.market_data.symbols import derive_symbols
from strategy_core.pipeline.inputs import extract_inputs, resolve_input_values

router = APIRouter(prefix="/strategy", tags=["strategy"])

# Global resolver (singleton, lazily built from environment)
_resolver: PriceResolver | None = None


def get_resolver() -> PriceResolver:
    """Get or initialize the price resolver singleton."""
    global _resolver
    if _resolver is None:
        _resolver = PriceResolver(QuotesApiClient(QuoteSourceConfig.from_env()))
    return _resolver


def set_resolver(resolver: PriceResolver | None) -> None:
    global _resolver
    _resolver = resolver


class InputsRequest(BaseModel):
    pipeline: Optional[Dict[str, Any]] = None
    inputValues: Dict[str, Any] = Field(default_factory=dict)


class InputDefResponse(BaseModel):
    inputKey: str
    label: str
    defaultValue: str
    nodeId: str
    condIndex: int
    value: str


class PricesRequest(BaseModel):
    transactions: Optional[List[Dict[str, Any]]] = None
    symbols: Optional[List[str]] = None

    @model_validator(mode="after")
    def _require_source(self) -> "PricesRequest":
        if self.transactions is None and self.symbols is None:
            raise ValueError("Either 'transactions' or 'symbols' is required")
        return self


class PricesResponse(BaseModel):
    symbols: List[str]
    prices: Dict[str, float]


@router.post("/inputs", response_model=List[InputDefResponse])
async def strategy_inputs(body: InputsRequest) -> list[dict[str, Any]]:
    """List the pipeline's user-editable inputs with their effective values."""
    inputs = extract_inputs(body.pipeline)
    values = resolve_input_values(inputs, body.inputValues)
    return [{**inp.to_dict(), "value": values[inp.input_key]} for inp in inputs]


@router.post("/prices", response_model=PricesResponse)
async def strategy_prices(body: PricesRequest) -> dict[str, Any]:
    """Resolve current prices for explicit symbols or for a transaction list.

    Never fails on quote-source errors; reference prices are returned instead.
    """
    if body.symbols is not None:
        symbols = sorted({s for s in body.symbols if s})
    else:
        symbols = sorted(derive_symbols(body.transactions))

    prices = await get_resolver().resolve_prices(symbols)
    return {"symbols": symbols, "prices": prices}
