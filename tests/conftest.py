"""Shared test fixtures for pytest.

Provides sample pipeline graphs, transactions and a controllable quote source.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import pytest

from strategy_core.types import Quote


class ControlledQuoteSource:
    """Quote source whose calls block until the test releases them."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._gates: list[asyncio.Event] = []

    async def get_quotes(self, symbols: Sequence[str]) -> list[Quote]:
        self.calls.append(list(symbols))
        gate = asyncio.Event()
        self._gates.append(gate)
        # Price encodes the call number so tests can tell passes apart
        call_number = len(self._gates)
        await gate.wait()
        return [Quote(symbol=s, price=float(10 * call_number)) for s in symbols]

    def release(self, call_index: int) -> None:
        self._gates[call_index].set()


@pytest.fixture
def sample_pipeline() -> dict[str, Any]:
    """Editor JSON with two filter nodes and a non-filter node in between."""
    return {
        "nodes": [
            {"id": "src", "type": "source", "data": {}},
            {
                "id": "n1",
                "type": "filter",
                "data": {
                    "conditions": [
                        {"field": "side", "operator": "=", "value": "BUY", "valueType": "static"},
                        {"field": "quantity", "operator": ">", "value": 10, "valueType": "input", "inputLabel": "Size"},
                    ]
                },
            },
            {"id": "agg", "type": "aggregate", "data": {"function": "sum"}},
            {
                "id": "n2",
                "type": "filter",
                "data": {"conditions": [{"field": "symbol", "operator": "=", "valueType": "input"}]},
            },
        ]
    }


@pytest.fixture
def sample_transactions() -> list[dict[str, Any]]:
    """Stock, ETF and option transactions with repeated symbols."""
    return [
        {"instrumentSymbol": "AAPL", "option": None},
        {"instrumentSymbol": "AAPL"},
        {"instrumentSymbol": "VOO"},
        {"instrumentSymbol": "MSFT", "option": {"expiration": "2026-12-18", "strike": 450, "type": "call"}},
        {"instrumentSymbol": ""},
        {"option": {"strike": 100}},
    ]


@pytest.fixture
def controlled_source() -> ControlledQuoteSource:
    return ControlledQuoteSource()
