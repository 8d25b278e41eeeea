from __future__ import annotations

from decimal import Decimal, InvalidOperation

from fastapi import APIRouter, Depends, HTTPException

from pool_valuation.api.deps import get_valuation_event_handler
from pool_valuation.api.schemas.events import (
    PoolLiquidityRequest,
    PoolLiquidityResponse,
    SwapRequest,
    SwapResponse,
    TokenPriceRequest,
    TokenPriceResponse,
)
from pool_valuation.application.dto.pool_liquidity import (
    UpdatePoolLiquidityInput,
    UpdatePoolLiquidityOutput,
)
from pool_valuation.application.dto.swap import SwapInput
from pool_valuation.application.use_cases.handle_valuation_events import ValuationEventHandler
from pool_valuation.domain.entities.latest_price import TokenPrice

router = APIRouter()


def _parse_decimal(value: str, *, field_name: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except InvalidOperation as exc:
        raise HTTPException(status_code=400, detail=f"{field_name} must be a decimal string.") from exc
    if not parsed.is_finite():
        raise HTTPException(status_code=400, detail=f"{field_name} must be finite.")
    return parsed


def _dec_to_str_or_none(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def _to_pool_liquidity_response(result: UpdatePoolLiquidityOutput) -> PoolLiquidityResponse:
    return PoolLiquidityResponse(
        pool_id=result.pool_id,
        committed=result.committed,
        status=result.status.value,
        old_liquidity=_dec_to_str_or_none(result.old_liquidity),
        new_liquidity=_dec_to_str_or_none(result.new_liquidity),
        liquidity_change=_dec_to_str_or_none(result.liquidity_change),
    )


@router.post("/v1/events/token-price", response_model=TokenPriceResponse)
def post_token_price(
    payload: TokenPriceRequest,
    handler: ValuationEventHandler = Depends(get_valuation_event_handler),
):
    result = handler.handle_token_price(
        TokenPrice(
            asset=payload.asset,
            pricing_asset=payload.pricing_asset,
            block=payload.block,
            pool_id=payload.pool_id,
            price=_parse_decimal(payload.price, field_name="price"),
        )
    )
    return TokenPriceResponse(
        latest_price_id=result.latest_price.id,
        asset=result.latest_price.asset,
        pricing_asset=result.latest_price.pricing_asset,
        block=payload.block,
        price=payload.price,
        latest_usd_price=_dec_to_str_or_none(result.token.latest_usd_price),
    )


@router.post("/v1/events/pool-liquidity", response_model=PoolLiquidityResponse)
def post_pool_liquidity(
    payload: PoolLiquidityRequest,
    handler: ValuationEventHandler = Depends(get_valuation_event_handler),
):
    result = handler.handle_pool_balance_changed(
        UpdatePoolLiquidityInput(
            pool_id=payload.pool_id,
            block=payload.block,
            timestamp=payload.timestamp,
        )
    )
    return _to_pool_liquidity_response(result)


@router.post("/v1/events/swap", response_model=SwapResponse)
def post_swap(
    payload: SwapRequest,
    handler: ValuationEventHandler = Depends(get_valuation_event_handler),
):
    result = handler.handle_swap(
        SwapInput(
            pool_id=payload.pool_id,
            token_in=payload.token_in,
            amount_in=_parse_decimal(payload.amount_in, field_name="amount_in"),
            token_out=payload.token_out,
            amount_out=_parse_decimal(payload.amount_out, field_name="amount_out"),
            block=payload.block,
            timestamp=payload.timestamp,
        )
    )
    return SwapResponse(
        value_usd=str(result.value_usd),
        liquidity=_to_pool_liquidity_response(result.liquidity),
    )
