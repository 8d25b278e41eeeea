from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry


load_dotenv()

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
USDT = "0xdac17f958d2ee523a2206206994597c13d831ec7"
BAL = "0xba100000625a3754423978a60c9317c58a424e3d"

DEFAULT_PRICING_ASSETS = [WETH, WBTC, USDC, DAI, USDT, BAL]
DEFAULT_USD_STABLE_ASSETS = [USDC, DAI, USDT]


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json_list(name: str, default: list[str]) -> list[str]:
    value = _env(name)
    if not value:
        return list(default)
    parsed = json.loads(value)
    if not isinstance(parsed, list):
        raise ValueError(f"{name} must be a JSON list.")
    return [str(item) for item in parsed]


@dataclass(frozen=True)
class Settings:
    pricing_assets: tuple[str, ...]
    usd_stable_assets: tuple[str, ...]
    balancer_id: str
    snapshot_period_seconds: int
    postgres_dsn: str
    log_level: str


def get_settings() -> Settings:
    usd_stable_assets = tuple(_json_list("USD_STABLE_ASSETS", DEFAULT_USD_STABLE_ASSETS))
    # The first stable keys every pool historical liquidity row.
    if not usd_stable_assets:
        raise ValueError("USD_STABLE_ASSETS must list at least one address.")
    return Settings(
        pricing_assets=tuple(_json_list("PRICING_ASSETS", DEFAULT_PRICING_ASSETS)),
        usd_stable_assets=usd_stable_assets,
        balancer_id=_env("BALANCER_ID", "2"),
        snapshot_period_seconds=int(_env("SNAPSHOT_PERIOD_SECONDS", "86400")),
        postgres_dsn=_env("POSTGRES_DSN", ""),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )


def build_pricing_asset_registry(settings: Settings) -> PricingAssetRegistry:
    return PricingAssetRegistry.from_addresses(
        pricing_assets=settings.pricing_assets,
        usd_stable_assets=settings.usd_stable_assets,
    )
