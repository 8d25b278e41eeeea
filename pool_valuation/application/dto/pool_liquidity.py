from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PoolLiquidityStatus(str, Enum):
    POOL_NOT_FOUND = "pool_not_found"
    NOT_ENOUGH_TOKENS = "not_enough_tokens"
    SANITY_CHECK_FAILED = "sanity_check_failed"
    COMMITTED = "committed"


@dataclass(frozen=True)
class UpdatePoolLiquidityInput:
    pool_id: str
    block: int
    timestamp: int


@dataclass(frozen=True)
class UpdatePoolLiquidityOutput:
    pool_id: str
    status: PoolLiquidityStatus
    old_liquidity: Decimal | None = None
    new_liquidity: Decimal | None = None
    liquidity_change: Decimal | None = None

    @property
    def committed(self) -> bool:
        return self.status is PoolLiquidityStatus.COMMITTED
