from __future__ import annotations

import logging

from fastapi import FastAPI

from pool_valuation.api.routers.events import router as events_router
from pool_valuation.api.routers.pricing_assets import router as pricing_assets_router
from pool_valuation.shared.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="Pool Valuation API")
app.include_router(events_router)
app.include_router(pricing_assets_router)
