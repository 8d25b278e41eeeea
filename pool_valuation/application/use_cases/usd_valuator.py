from __future__ import annotations

from decimal import Decimal

from pool_valuation.application.ports.token_port import TokenPort
from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry
from pool_valuation.domain.services.usd_valuation import average_swap_legs, value_in_usd


class UsdValuator:
    def __init__(self, *, registry: PricingAssetRegistry, token_port: TokenPort):
        self._registry = registry
        self._token_port = token_port

    def value_in_usd(self, *, amount: Decimal, asset: str) -> Decimal:
        if self._registry.is_usd_stable(asset):
            return value_in_usd(amount, is_usd_stable=True, latest_usd_price=None)

        token = self._token_port.get_token(address=asset)
        return value_in_usd(
            amount,
            is_usd_stable=False,
            latest_usd_price=token.latest_usd_price if token is not None else None,
        )

    def swap_value_in_usd(
        self,
        *,
        token_in: str,
        amount_in: Decimal,
        token_out: str,
        amount_out: Decimal,
    ) -> Decimal:
        registry = self._registry

        # Stables anchor first, then a lone pricing asset.
        if registry.is_usd_stable(token_out):
            return self.value_in_usd(amount=amount_out, asset=token_out)
        if registry.is_usd_stable(token_in):
            return self.value_in_usd(amount=amount_in, asset=token_in)

        in_is_pricing = registry.is_pricing_asset(token_in)
        out_is_pricing = registry.is_pricing_asset(token_out)
        if in_is_pricing and not out_is_pricing:
            return self.value_in_usd(amount=amount_in, asset=token_in)
        if out_is_pricing and not in_is_pricing:
            return self.value_in_usd(amount=amount_out, asset=token_out)

        return average_swap_legs(
            self.value_in_usd(amount=amount_in, asset=token_in),
            self.value_in_usd(amount=amount_out, asset=token_out),
        )
