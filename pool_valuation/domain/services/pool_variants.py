from __future__ import annotations

from pool_valuation.domain.entities.pool import Pool, PoolType

# Pools whose share token sits in their own token list with a virtual balance.
VIRTUAL_SUPPLY_POOL_TYPES: dict[PoolType, bool] = {
    PoolType.STABLE_PHANTOM: True,
    PoolType.COMPOSABLE_STABLE: True,
    PoolType.AAVE_LINEAR: True,
    PoolType.ERC4626_LINEAR: True,
    PoolType.EULER_LINEAR: True,
    PoolType.GEARBOX_LINEAR: True,
}


def has_virtual_supply(pool: Pool) -> bool:
    return VIRTUAL_SUPPLY_POOL_TYPES.get(pool.pool_type, False)
