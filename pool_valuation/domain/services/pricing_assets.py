from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pool_valuation.domain.services.addresses import canonical_address


@dataclass(frozen=True)
class PricingAssetRegistry:
    """Assets trusted for valuation.

    `pricing_assets` is ordered by preference: the first entry is the most
    trusted intermediary. `usd_stable_assets` are taken as worth exactly one
    USD; the first of them keys the pool historical liquidity rows.
    """

    pricing_assets: tuple[str, ...]
    usd_stable_assets: tuple[str, ...]

    @classmethod
    def from_addresses(
        cls,
        *,
        pricing_assets: Iterable[str],
        usd_stable_assets: Iterable[str],
    ) -> "PricingAssetRegistry":
        return cls(
            pricing_assets=tuple(canonical_address(asset) for asset in pricing_assets),
            usd_stable_assets=tuple(canonical_address(asset) for asset in usd_stable_assets),
        )

    @property
    def primary_usd_stable(self) -> str:
        if not self.usd_stable_assets:
            raise ValueError("At least one USD stable asset must be configured.")
        return self.usd_stable_assets[0]

    def is_pricing_asset(self, asset: str) -> bool:
        return canonical_address(asset) in self.pricing_assets

    def is_usd_stable(self, asset: str) -> bool:
        return canonical_address(asset) in self.usd_stable_assets

    def get_preferential_pricing_asset(self, candidates: Iterable[str]) -> str | None:
        available = {canonical_address(candidate) for candidate in candidates}
        for asset in self.pricing_assets:
            if asset in available:
                return asset
        return None
