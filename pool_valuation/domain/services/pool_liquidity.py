from __future__ import annotations

from decimal import Decimal

ZERO = Decimal("0")


def get_pool_historical_liquidity_id(pool_id: str, pricing_asset: str, block: int) -> str:
    return f"{pool_id}-{pricing_asset.lower()}-{block}"


def calculate_pool_share_value(*, pool_liquidity: Decimal, total_shares: Decimal) -> Decimal:
    if total_shares > ZERO:
        return pool_liquidity / total_shares
    return ZERO


def liquidity_sign_changed(*, old_liquidity: Decimal, new_liquidity: Decimal) -> bool:
    """True when exactly one of the two valuations is positive.

    A pool that flips between empty and funded in a single valuation most
    likely lost (or gained) the price of one of its assets, so the new total
    is not trusted.
    """
    return (new_liquidity > ZERO) != (old_liquidity > ZERO)


def snapshot_bucket_start(timestamp: int, *, period_seconds: int) -> int:
    if period_seconds <= 0:
        raise ValueError("period_seconds must be positive.")
    return (timestamp // period_seconds) * period_seconds


def get_snapshot_id(entity_id: str, timestamp: int, *, period_seconds: int) -> str:
    bucket = snapshot_bucket_start(timestamp, period_seconds=period_seconds) // period_seconds
    return f"{entity_id}-{bucket}"
