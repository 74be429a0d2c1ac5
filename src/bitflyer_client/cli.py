#!/usr/bin/env python
"""
Command line entry point for read-only bitFlyer calls.

Examples::

    bitflyer ticker --product-code BTC_JPY
    bitflyer executions --product-code FX_BTC_JPY --count 5
    API_KEY=... API_SECRET=... bitflyer balance

Private subcommands read credentials through ``ClientConfig.from_env``.
The decoded response is printed as JSON.  Order placement is deliberately
not exposed here.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from .client import BitflyerClient
from .config import ClientConfig
from .endpoints import (
    GetBalance,
    GetBoard,
    GetBoardHealth,
    GetBoardState,
    GetChildOrders,
    GetCollateral,
    GetExecutions,
    GetMarkets,
    GetParentOrders,
    GetPositions,
    GetTicker,
)
from .errors import BitflyerError
from .models import OrderState, ProductCode
from .request import ApiRequest

logger = logging.getLogger(__name__)


def _product(args: argparse.Namespace) -> Optional[ProductCode]:
    return ProductCode(args.product_code) if args.product_code else None


def _state(args: argparse.Namespace) -> Optional[OrderState]:
    return OrderState(args.state) if args.state else None


BUILDERS: Dict[str, Callable[[argparse.Namespace], ApiRequest]] = {
    "markets": lambda a: GetMarkets(),
    "ticker": lambda a: GetTicker(product_code=_product(a)),
    "board": lambda a: GetBoard(product_code=_product(a)),
    "executions": lambda a: GetExecutions(product_code=_product(a), count=a.count),
    "health": lambda a: GetBoardHealth(product_code=_product(a)),
    "state": lambda a: GetBoardState(product_code=_product(a)),
    "balance": lambda a: GetBalance(),
    "collateral": lambda a: GetCollateral(),
    "positions": lambda a: GetPositions(product_code=_product(a) or ProductCode.FX_BTC_JPY),
    "child-orders": lambda a: GetChildOrders(
        product_code=_product(a), count=a.count, child_order_state=_state(a)
    ),
    "parent-orders": lambda a: GetParentOrders(
        product_code=_product(a), count=a.count, parent_order_state=_state(a)
    ),
}


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bitflyer", description="Query the bitFlyer REST API.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level.")
    parser.add_argument("--timeout", type=float, default=None, help="Per-call timeout in seconds.")
    sub = parser.add_subparsers(dest="command", required=True)
    for name in BUILDERS:
        cmd = sub.add_parser(name)
        cmd.add_argument("--product-code", default=None, help="e.g. BTC_JPY")
        if name in ("executions", "child-orders", "parent-orders"):
            cmd.add_argument("--count", type=int, default=None)
        if name in ("child-orders", "parent-orders"):
            cmd.add_argument("--state", choices=[s.value for s in OrderState], default=None)
    return parser


async def run(args: argparse.Namespace, config: Optional[ClientConfig] = None) -> Any:
    request = BUILDERS[args.command](args)
    config = config or ClientConfig.from_env()
    async with BitflyerClient(config) as client:
        return await client.send(request, timeout=args.timeout)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        result = asyncio.run(run(args))
    except BitflyerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(_jsonable(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
