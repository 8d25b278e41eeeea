from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pool_valuation.domain.entities.latest_price import LatestPrice
from pool_valuation.domain.entities.liquidity import Balancer, BalancerSnapshot, PoolSnapshot
from pool_valuation.domain.entities.pool import Pool, PoolToken, PoolType
from pool_valuation.domain.entities.token import Token


def _dec(value: Any) -> Decimal:
    return Decimal(str(value))


def _dec_or_none(value: Any) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def decimal_param(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def map_row_to_token(row: Mapping[str, Any]) -> Token:
    return Token(
        address=row["address"],
        latest_usd_price=_dec_or_none(row["latest_usd_price"]),
        latest_price_id=row["latest_price_id"],
    )


def map_row_to_latest_price(row: Mapping[str, Any]) -> LatestPrice:
    return LatestPrice(
        id=row["id"],
        asset=row["asset"],
        pricing_asset=row["pricing_asset"],
        block=int(row["block"]) if row["block"] is not None else None,
        pool_id=row["pool_id"],
        price=_dec_or_none(row["price"]),
    )


def map_row_to_pool(row: Mapping[str, Any]) -> Pool:
    return Pool(
        id=row["id"],
        address=row["address"],
        pool_type=PoolType(row["pool_type"]),
        tokens_list=tuple(json.loads(row["tokens_list"] or "[]")),
        total_shares=_dec(row["total_shares"]),
        total_liquidity=_dec(row["total_liquidity"]),
    )


def map_row_to_pool_token(row: Mapping[str, Any]) -> PoolToken:
    return PoolToken(
        pool_id=row["pool_id"],
        token_address=row["token_address"],
        balance=_dec(row["balance"]),
    )


def map_row_to_balancer(row: Mapping[str, Any]) -> Balancer:
    return Balancer(id=row["id"], total_liquidity=_dec(row["total_liquidity"]))


def map_row_to_balancer_snapshot(row: Mapping[str, Any]) -> BalancerSnapshot:
    return BalancerSnapshot(
        id=row["id"],
        balancer_id=row["balancer_id"],
        timestamp=int(row["timestamp"]),
        total_liquidity=_dec(row["total_liquidity"]),
    )


def map_row_to_pool_snapshot(row: Mapping[str, Any]) -> PoolSnapshot:
    return PoolSnapshot(
        id=row["id"],
        pool_id=row["pool_id"],
        timestamp=int(row["timestamp"]),
        total_shares=_dec(row["total_shares"]),
        total_liquidity=_dec(row["total_liquidity"]),
    )
