from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from pool_valuation.domain.entities.liquidity import Balancer


class BalancerPort(Protocol):
    def get_or_create_balancer(self, *, balancer_id: str) -> Balancer:
        ...

    def add_balancer_liquidity(self, *, balancer_id: str, delta: Decimal) -> Balancer:
        ...
