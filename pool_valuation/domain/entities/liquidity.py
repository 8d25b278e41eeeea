from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PoolHistoricalLiquidity:
    id: str
    pool_id: str
    pricing_asset: str
    block: int
    pool_total_shares: Decimal
    pool_liquidity: Decimal
    pool_share_value: Decimal


@dataclass(frozen=True)
class Balancer:
    id: str
    total_liquidity: Decimal = Decimal("0")


@dataclass(frozen=True)
class BalancerSnapshot:
    id: str
    balancer_id: str
    timestamp: int
    total_liquidity: Decimal = Decimal("0")


@dataclass(frozen=True)
class PoolSnapshot:
    id: str
    pool_id: str
    timestamp: int
    total_shares: Decimal
    total_liquidity: Decimal
