"""Tests for quotes API configuration and the fallback price table."""

from __future__ import annotations

import pytest

from strategy_core.config import (
    DEFAULT_FALLBACK_TABLE,
    FallbackPriceTable,
    QuoteSourceConfig,
)


def test_from_env_defaults():
    config = QuoteSourceConfig.from_env({})

    assert config.base_url == "http://localhost:3000/api"
    assert config.user_id == "default-user"
    assert config.timeout_seconds == 10.0


def test_from_env_overrides():
    config = QuoteSourceConfig.from_env(
        {
            "QUOTES_API_BASE_URL": "https://strategies.example.com/api/",
            "QUOTES_API_USER_ID": "alice",
            "QUOTES_API_TIMEOUT": "2.5",
        }
    )

    assert config.base_url == "https://strategies.example.com/api"
    assert config.user_id == "alice"
    assert config.timeout_seconds == 2.5


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("QUOTES_API_USER_ID", "from-env")
    monkeypatch.delenv("QUOTES_API_TIMEOUT", raising=False)

    assert QuoteSourceConfig.from_env().user_id == "from-env"


@pytest.mark.parametrize("raw", ["abc", "0", "-1"])
def test_from_env_rejects_bad_timeout(raw):
    with pytest.raises(ValueError, match="QUOTES_API_TIMEOUT"):
        QuoteSourceConfig.from_env({"QUOTES_API_TIMEOUT": raw})


def test_default_fallback_table():
    assert DEFAULT_FALLBACK_TABLE.price_for("AAPL") == 185.5
    assert DEFAULT_FALLBACK_TABLE.price_for("MSFT") == 420.0
    assert DEFAULT_FALLBACK_TABLE.price_for("VOO") == 405.0
    assert DEFAULT_FALLBACK_TABLE.price_for("SPY") == 485.0
    assert DEFAULT_FALLBACK_TABLE.price_for("UNKNOWN") == 100.0


def test_custom_fallback_table():
    table = FallbackPriceTable(prices={"BRK.B": 410.0}, default_price=50.0)

    assert table.price_for("BRK.B") == 410.0
    assert table.price_for("AAPL") == 50.0
