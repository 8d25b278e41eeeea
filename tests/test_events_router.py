from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient

from pool_valuation.api.deps import get_pricing_asset_registry, get_valuation_event_handler
from pool_valuation.application.dto.latest_price import UpdateLatestPriceOutput
from pool_valuation.application.dto.pool_liquidity import (
    PoolLiquidityStatus,
    UpdatePoolLiquidityOutput,
)
from pool_valuation.application.dto.swap import SwapValuation
from pool_valuation.domain.entities.latest_price import LatestPrice
from pool_valuation.domain.entities.token import Token
from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry
from pool_valuation.main import app

WETH = "0x00000000000000000000000000000000000000e1"
USDC = "0x00000000000000000000000000000000000000c1"


class FakeValuationEventHandler:
    def __init__(self):
        self.commands = []

    def handle_token_price(self, token_price):
        self.commands.append(token_price)
        return UpdateLatestPriceOutput(
            latest_price=LatestPrice(
                id=f"{token_price.asset}-{token_price.pricing_asset}",
                asset=token_price.asset,
                pricing_asset=token_price.pricing_asset,
                block=token_price.block,
                pool_id=token_price.pool_id,
                price=token_price.price,
            ),
            token=Token(address=token_price.asset, latest_usd_price=token_price.price),
        )

    def handle_pool_balance_changed(self, command):
        self.commands.append(command)
        return UpdatePoolLiquidityOutput(
            pool_id=command.pool_id,
            status=PoolLiquidityStatus.SANITY_CHECK_FAILED,
            old_liquidity=Decimal("40"),
            new_liquidity=Decimal("0"),
        )

    def handle_swap(self, swap):
        self.commands.append(swap)
        return SwapValuation(
            value_usd=Decimal("1990.5"),
            liquidity=UpdatePoolLiquidityOutput(
                pool_id=swap.pool_id,
                status=PoolLiquidityStatus.COMMITTED,
                old_liquidity=Decimal("10"),
                new_liquidity=Decimal("12"),
                liquidity_change=Decimal("2"),
            ),
        )


def _client(handler: FakeValuationEventHandler) -> TestClient:
    app.dependency_overrides[get_valuation_event_handler] = lambda: handler
    app.dependency_overrides[get_pricing_asset_registry] = lambda: PricingAssetRegistry.from_addresses(
        pricing_assets=[WETH, USDC],
        usd_stable_assets=[USDC],
    )
    return TestClient(app)


def test_token_price_event_normalizes_addresses_and_returns_usd_price():
    handler = FakeValuationEventHandler()
    client = _client(handler)

    response = client.post(
        "/v1/events/token-price",
        json={
            "asset": WETH.upper().replace("0X", "0x"),
            "pricing_asset": USDC,
            "block": 5,
            "pool_id": "pool-1",
            "price": "2000.5",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["latest_price_id"] == f"{WETH}-{USDC}"
    assert payload["latest_usd_price"] == "2000.5"
    assert handler.commands[0].price == Decimal("2000.5")
    app.dependency_overrides.clear()


def test_token_price_event_rejects_bad_price():
    client = _client(FakeValuationEventHandler())

    response = client.post(
        "/v1/events/token-price",
        json={"asset": WETH, "pricing_asset": USDC, "block": 5, "pool_id": "p", "price": "abc"},
    )

    assert response.status_code == 400
    app.dependency_overrides.clear()


def test_token_price_event_rejects_bad_address():
    client = _client(FakeValuationEventHandler())

    response = client.post(
        "/v1/events/token-price",
        json={"asset": "weth", "pricing_asset": USDC, "block": 5, "pool_id": "p", "price": "1"},
    )

    assert response.status_code == 422
    app.dependency_overrides.clear()


def test_pool_liquidity_event_reports_rejection():
    client = _client(FakeValuationEventHandler())

    response = client.post("/v1/events/pool-liquidity", json={"pool_id": "pool-1", "block": 7, "timestamp": 100})

    assert response.status_code == 200
    payload = response.json()
    assert payload["committed"] is False
    assert payload["status"] == "sanity_check_failed"
    assert payload["old_liquidity"] == "40"
    assert payload["liquidity_change"] is None
    app.dependency_overrides.clear()


def test_swap_event_returns_value_and_liquidity():
    client = _client(FakeValuationEventHandler())

    response = client.post(
        "/v1/events/swap",
        json={
            "pool_id": "pool-1",
            "token_in": WETH,
            "amount_in": "1",
            "token_out": USDC,
            "amount_out": "1990.5",
            "block": 8,
            "timestamp": 100,
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["value_usd"] == "1990.5"
    assert payload["liquidity"]["committed"] is True
    assert payload["liquidity"]["liquidity_change"] == "2"
    app.dependency_overrides.clear()


def test_preferential_pricing_asset_endpoint():
    client = _client(FakeValuationEventHandler())

    found = client.get(
        "/v1/pricing-assets/preferential",
        params=[("candidates", USDC), ("candidates", WETH)],
    )
    missing = client.get("/v1/pricing-assets/preferential", params={"candidates": "0x01"})

    assert found.json() == {"asset": WETH}
    assert missing.json() == {"asset": None}
    app.dependency_overrides.clear()
