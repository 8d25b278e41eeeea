from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PoolType(str, Enum):
    WEIGHTED = "Weighted"
    STABLE = "Stable"
    META_STABLE = "MetaStable"
    STABLE_PHANTOM = "StablePhantom"
    COMPOSABLE_STABLE = "ComposableStable"
    AAVE_LINEAR = "AaveLinear"
    ERC4626_LINEAR = "ERC4626Linear"
    EULER_LINEAR = "EulerLinear"
    GEARBOX_LINEAR = "GearboxLinear"
    LIQUIDITY_BOOTSTRAPPING = "LiquidityBootstrapping"
    INVESTMENT = "Investment"
    ELEMENT = "Element"
    GYRO2 = "Gyro2"
    GYRO3 = "Gyro3"
    GYROE = "GyroE"
    FX = "FX"


@dataclass(frozen=True)
class Pool:
    id: str
    address: str
    pool_type: PoolType
    tokens_list: tuple[str, ...] = field(default_factory=tuple)
    total_shares: Decimal = Decimal("0")
    total_liquidity: Decimal = Decimal("0")


@dataclass(frozen=True)
class PoolToken:
    pool_id: str
    token_address: str
    balance: Decimal

    @property
    def id(self) -> str:
        return get_pool_token_id(self.pool_id, self.token_address)


def get_pool_token_id(pool_id: str, token_address: str) -> str:
    return f"{pool_id}-{token_address.lower()}"
