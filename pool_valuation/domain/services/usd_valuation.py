from __future__ import annotations

from decimal import Decimal

ZERO = Decimal("0")


def value_in_usd(
    amount: Decimal,
    *,
    is_usd_stable: bool,
    latest_usd_price: Decimal | None,
) -> Decimal:
    if is_usd_stable:
        return amount
    if latest_usd_price is None:
        return ZERO
    return amount * latest_usd_price


def average_swap_legs(value_in_usd: Decimal, value_out_usd: Decimal) -> Decimal:
    # A single priced leg is not diluted by an unpriced zero.
    divisor = Decimal("2") if value_in_usd > ZERO and value_out_usd > ZERO else Decimal("1")
    return (value_in_usd + value_out_usd) / divisor
