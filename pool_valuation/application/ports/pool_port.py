from __future__ import annotations

from typing import Protocol

from pool_valuation.domain.entities.pool import Pool, PoolToken


class PoolPort(Protocol):
    def get_pool(self, *, pool_id: str, for_update: bool = False) -> Pool | None:
        ...

    def save_pool(self, pool: Pool) -> None:
        ...

    def get_pool_token(self, *, pool_id: str, token_address: str) -> PoolToken | None:
        ...
