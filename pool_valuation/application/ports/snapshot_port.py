from __future__ import annotations

from typing import Protocol

from pool_valuation.domain.entities.liquidity import BalancerSnapshot
from pool_valuation.domain.entities.pool import Pool


class SnapshotPort(Protocol):
    def create_pool_snapshot(self, pool: Pool, timestamp: int) -> None:
        ...

    def get_balancer_snapshot(self, *, balancer_id: str, timestamp: int) -> BalancerSnapshot:
        ...

    def save_balancer_snapshot(self, snapshot: BalancerSnapshot) -> None:
        ...
