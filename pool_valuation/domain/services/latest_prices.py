from __future__ import annotations

from pool_valuation.domain.services.addresses import canonical_address


def get_latest_price_id(asset: str, pricing_asset: str) -> str:
    return f"{canonical_address(asset)}-{canonical_address(pricing_asset)}"
