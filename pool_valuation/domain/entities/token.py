from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Token:
    address: str
    latest_usd_price: Decimal | None = None
    latest_price_id: str | None = None
