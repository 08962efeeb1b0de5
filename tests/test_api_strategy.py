"""Tests for the /strategy API endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from strategy_core.market_data.price_service import PriceResolver
from strategy_core.market_data.quotes_client import QuoteSourceError
from strategy_core.types import Quote


@pytest.fixture
def quote_source():
    source = AsyncMock()
    source.get_quotes.return_value = [Quote("AAPL", 190.0), Quote("VOO", 401.5)]
    return source


@pytest.fixture
def client(quote_source):
    """Create a test client with a mocked quote source."""
    from api.main import app
    from api.routes import strategy

    strategy.set_resolver(PriceResolver(quote_source))
    yield TestClient(app)
    strategy.set_resolver(None)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_inputs_endpoint(client, sample_pipeline):
    response = client.post(
        "/strategy/inputs",
        json={"pipeline": sample_pipeline, "inputValues": {"n2_0": "AAPL"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert [d["inputKey"] for d in data] == ["n1_1", "n2_0"]
    assert data[0]["label"] == "Size"
    assert data[0]["value"] == "10"
    assert data[1]["value"] == "AAPL"


def test_inputs_endpoint_without_pipeline(client):
    response = client.post("/strategy/inputs", json={})

    assert response.status_code == 200
    assert response.json() == []


def test_prices_from_transactions(client, quote_source, sample_transactions):
    response = client.post("/strategy/prices", json={"transactions": sample_transactions})

    assert response.status_code == 200
    assert response.json() == {"symbols": ["AAPL", "VOO"], "prices": {"AAPL": 190.0, "VOO": 401.5}}
    quote_source.get_quotes.assert_awaited_once_with(["AAPL", "VOO"])


def test_prices_from_symbols_fallback(client, quote_source):
    quote_source.get_quotes.side_effect = QuoteSourceError("down")

    response = client.post("/strategy/prices", json={"symbols": ["AAPL", "ZZZZ", "AAPL", ""]})

    assert response.status_code == 200
    assert response.json() == {"symbols": ["AAPL", "ZZZZ"], "prices": {"AAPL": 185.5, "ZZZZ": 100.0}}


def test_prices_empty_symbols(client, quote_source):
    response = client.post("/strategy/prices", json={"symbols": []})

    assert response.status_code == 200
    assert response.json() == {"symbols": [], "prices": {}}
    quote_source.get_quotes.assert_not_called()


def test_prices_requires_body(client):
    response = client.post("/strategy/prices", json={})

    assert response.status_code == 422
