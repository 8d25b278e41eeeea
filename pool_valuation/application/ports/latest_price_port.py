from __future__ import annotations

from typing import Protocol

from pool_valuation.domain.entities.latest_price import LatestPrice


class LatestPricePort(Protocol):
    def get_latest_price(self, *, latest_price_id: str) -> LatestPrice | None:
        ...

    def get_or_create_latest_price(self, *, asset: str, pricing_asset: str) -> LatestPrice:
        ...

    def save_latest_price(self, latest_price: LatestPrice) -> None:
        ...
