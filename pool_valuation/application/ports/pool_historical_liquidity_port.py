from __future__ import annotations

from typing import Protocol

from pool_valuation.domain.entities.liquidity import PoolHistoricalLiquidity


class PoolHistoricalLiquidityPort(Protocol):
    def save_pool_historical_liquidity(self, row: PoolHistoricalLiquidity) -> None:
        ...
