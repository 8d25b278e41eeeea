from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pool_valuation.application.dto.pool_liquidity import UpdatePoolLiquidityOutput


@dataclass(frozen=True)
class SwapInput:
    pool_id: str
    token_in: str
    amount_in: Decimal
    token_out: str
    amount_out: Decimal
    block: int
    timestamp: int


@dataclass(frozen=True)
class SwapValuation:
    value_usd: Decimal
    liquidity: UpdatePoolLiquidityOutput
