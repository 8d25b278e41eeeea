from __future__ import annotations

from dataclasses import dataclass

from pool_valuation.domain.entities.latest_price import LatestPrice
from pool_valuation.domain.entities.token import Token


@dataclass(frozen=True)
class UpdateLatestPriceOutput:
    latest_price: LatestPrice
    token: Token
