#!/usr/bin/env python3
"""Print a strategy's pipeline inputs and current prices as JSON.

The strategy file is the web app's JSON document, e.g.:

    {
      "pipeline": {"nodes": [...]},
      "inputValues": {"n1_1": "50"},
      "transactions": [{"instrumentSymbol": "AAPL"}, ...]
    }

Usage:
    python -m scripts.resolve_strategy strategy.json [--inputs-only] [--verbose]

Environment:
    QUOTES_API_BASE_URL - market-data API base (default: http://localhost:3000/api)
    QUOTES_API_USER_ID  - sent as X-User-Id
    QUOTES_API_TIMEOUT  - request timeout in seconds
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

# Ensure imports work when invoked as a script.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from strategy_core.config import QuoteSourceConfig  # noqa: E402
from strategy_core.market_data.price_service import PriceResolver  # noqa: E402
from strategy_core.market_data.quotes_client import QuotesApiClient  # noqa: E402
from strategy_core.market_data.subscription import PriceSubscription  # noqa: E402
from strategy_core.pipeline.inputs import extract_inputs, resolve_input_values  # noqa: E402


async def resolve_document(
    document: dict[str, Any],
    *,
    config: Optional[QuoteSourceConfig] = None,
    inputs_only: bool = False,
) -> dict[str, Any]:
    inputs = extract_inputs(document.get("pipeline"))
    values = resolve_input_values(inputs, document.get("inputValues"))
    result: dict[str, Any] = {
        "inputs": [{**inp.to_dict(), "value": values[inp.input_key]} for inp in inputs],
    }
    if inputs_only:
        return result

    async with QuotesApiClient(config or QuoteSourceConfig.from_env()) as client:
        subscription = PriceSubscription(PriceResolver(client))
        subscription.update_transactions(document.get("transactions"))
        result["prices"] = await subscription.wait_idle()
        await subscription.aclose()
    return result


def main() -> int:
    parser = argparse.ArgumentParser(description="Resolve a strategy's pipeline inputs and prices")
    parser.add_argument("path", type=Path, help="Strategy JSON file")
    parser.add_argument("--inputs-only", action="store_true", help="Skip price resolution")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        document = json.loads(args.path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"❌ Cannot read strategy file {args.path}: {exc}", file=sys.stderr)
        return 1
    if not isinstance(document, dict):
        print("❌ Strategy file must contain a JSON object", file=sys.stderr)
        return 1

    config = None
    if not args.inputs_only:
        try:
            config = QuoteSourceConfig.from_env()
        except ValueError as exc:
            print(f"❌ {exc}", file=sys.stderr)
            return 1

    result = asyncio.run(resolve_document(document, config=config, inputs_only=args.inputs_only))
    print(json.dumps(result, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
