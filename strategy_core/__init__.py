"""Strategy core modules.

Derive/resolve layer for pipeline-based trading strategies:

- types: pipeline graph, transactions, quotes (frozen dataclasses)
- config: quotes API settings and the fallback price table
- pipeline: discovery of user-editable inputs in filter nodes
- market_data: symbol derivation, quote client, price resolution and the
  generation-stamped price subscription

Nothing here persists state; every pass is computed on demand.
"""
