from __future__ import annotations

from pydantic import BaseModel, Field


class PreferentialPricingAssetResponse(BaseModel):
    asset: str | None = Field(None, description="Most preferred pricing asset among candidates.")
