from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from pool_valuation.application.use_cases.handle_valuation_events import ValuationEventHandler
from pool_valuation.application.use_cases.update_bpt_price import UpdateBptPriceUseCase
from pool_valuation.application.use_cases.update_latest_price import UpdateLatestPriceUseCase
from pool_valuation.application.use_cases.update_pool_liquidity import UpdatePoolLiquidityUseCase
from pool_valuation.application.use_cases.usd_valuator import UsdValuator
from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry
from pool_valuation.core.db import get_engine
from pool_valuation.infrastructure.db.repositories.valuation_repository import (
    SqlValuationRepository,
)
from pool_valuation.shared.config import build_pricing_asset_registry, get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


@lru_cache(maxsize=1)
def get_pricing_asset_registry() -> PricingAssetRegistry:
    return build_pricing_asset_registry(get_settings())


def build_valuation_event_handler(
    *,
    registry: PricingAssetRegistry,
    repository: SqlValuationRepository,
    balancer_id: str,
) -> ValuationEventHandler:
    usd_valuator = UsdValuator(registry=registry, token_port=repository)
    return ValuationEventHandler(
        usd_valuator=usd_valuator,
        update_latest_price_use_case=UpdateLatestPriceUseCase(
            unit_of_work=repository,
            latest_price_port=repository,
            token_port=repository,
            usd_valuator=usd_valuator,
        ),
        update_pool_liquidity_use_case=UpdatePoolLiquidityUseCase(
            unit_of_work=repository,
            registry=registry,
            pool_port=repository,
            historical_liquidity_port=repository,
            balancer_port=repository,
            snapshot_port=repository,
            usd_valuator=usd_valuator,
            update_bpt_price_use_case=UpdateBptPriceUseCase(token_port=repository),
            balancer_id=balancer_id,
        ),
    )


@lru_cache(maxsize=1)
def _get_valuation_event_handler() -> ValuationEventHandler:
    settings = get_settings()
    repository = SqlValuationRepository(
        _get_db_engine(),
        snapshot_period_seconds=settings.snapshot_period_seconds,
    )
    return build_valuation_event_handler(
        registry=get_pricing_asset_registry(),
        repository=repository,
        balancer_id=settings.balancer_id,
    )


def get_valuation_event_handler() -> ValuationEventHandler:
    # One handler per process: its lock serializes all mutations.
    return _get_valuation_event_handler()
