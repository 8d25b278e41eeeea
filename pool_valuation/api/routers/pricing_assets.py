from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from pool_valuation.api.deps import get_pricing_asset_registry
from pool_valuation.api.schemas.pricing_assets import PreferentialPricingAssetResponse
from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry

router = APIRouter()


@router.get("/v1/pricing-assets/preferential", response_model=PreferentialPricingAssetResponse)
def get_preferential_pricing_asset(
    candidates: list[str] = Query(default=[]),
    registry: PricingAssetRegistry = Depends(get_pricing_asset_registry),
):
    return PreferentialPricingAssetResponse(
        asset=registry.get_preferential_pricing_asset(candidates),
    )
