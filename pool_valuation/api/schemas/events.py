from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from pool_valuation.domain.services.addresses import normalize_address


class TokenPriceRequest(BaseModel):
    asset: str
    pricing_asset: str
    block: int = Field(..., ge=0)
    pool_id: str
    price: str = Field(..., description="Asset price denominated in pricing_asset.")

    @field_validator("asset", "pricing_asset")
    @classmethod
    def _address(cls, value: str) -> str:
        return normalize_address(value)


class TokenPriceResponse(BaseModel):
    latest_price_id: str
    asset: str
    pricing_asset: str
    block: int
    price: str
    latest_usd_price: str | None = None


class PoolLiquidityRequest(BaseModel):
    pool_id: str
    block: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)


class PoolLiquidityResponse(BaseModel):
    pool_id: str
    committed: bool
    status: str
    old_liquidity: str | None = None
    new_liquidity: str | None = None
    liquidity_change: str | None = None


class SwapRequest(BaseModel):
    pool_id: str
    token_in: str
    amount_in: str
    token_out: str
    amount_out: str
    block: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)

    @field_validator("token_in", "token_out")
    @classmethod
    def _address(cls, value: str) -> str:
        return normalize_address(value)


class SwapResponse(BaseModel):
    value_usd: str
    liquidity: PoolLiquidityResponse
