from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from strategy_core.types import Transaction

TransactionLike = Union[Transaction, Mapping[str, Any]]


def as_transaction(tx: Any) -> Optional[Transaction]:
    """Parse a store/API transaction; ``None`` for entries that are not transactions."""
    if isinstance(tx, Transaction):
        return tx
    if isinstance(tx, Mapping):
        return Transaction.from_dict(tx)
    return None


def is_derivative(tx: TransactionLike) -> bool:
    """True when the transaction references an option contract (has an expiration)."""
    parsed = as_transaction(tx)
    return parsed is not None and parsed.option is not None and "expiration" in parsed.option


def derive_symbols(transactions: Optional[Iterable[TransactionLike]]) -> frozenset[str]:
    """Unique stock/ETF symbols referenced by the transactions (options excluded).

    Entries that are neither a ``Transaction`` nor a mapping are skipped.
    """
    symbols: set[str] = set()
    for raw in transactions or ():
        tx = as_transaction(raw)
        if tx is None or is_derivative(tx):
            continue
        if tx.instrument_symbol:
            symbols.add(tx.instrument_symbol)
    return frozenset(symbols)
