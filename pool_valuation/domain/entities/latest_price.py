from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TokenPrice:
    """Price observation produced upstream; `price` is denominated in `pricing_asset`."""

    asset: str
    pricing_asset: str
    block: int
    pool_id: str
    price: Decimal


@dataclass(frozen=True)
class LatestPrice:
    id: str
    asset: str
    pricing_asset: str
    block: int | None = None
    pool_id: str | None = None
    price: Decimal | None = None
