from __future__ import annotations

from decimal import Decimal

from pool_valuation.application.dto.pool_liquidity import (
    PoolLiquidityStatus,
    UpdatePoolLiquidityInput,
    UpdatePoolLiquidityOutput,
)
from pool_valuation.application.dto.swap import SwapInput
from pool_valuation.application.use_cases.handle_valuation_events import ValuationEventHandler
from pool_valuation.application.use_cases.usd_valuator import UsdValuator
from pool_valuation.domain.entities.latest_price import TokenPrice
from pool_valuation.domain.entities.token import Token
from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry

WETH = "0x00000000000000000000000000000000000000e1"
USDC = "0x00000000000000000000000000000000000000c1"


class FakeTokenPort:
    def __init__(self):
        self.tokens = {WETH: Token(address=WETH, latest_usd_price=Decimal("2000"))}

    def get_token(self, *, address: str) -> Token | None:
        return self.tokens.get(address)


class RecordingUpdateLatestPrice:
    def __init__(self):
        self.calls: list[TokenPrice] = []

    def execute(self, token_price: TokenPrice):
        self.calls.append(token_price)
        return "updated"


class RecordingUpdatePoolLiquidity:
    def __init__(self, status: PoolLiquidityStatus):
        self.status = status
        self.calls: list[UpdatePoolLiquidityInput] = []

    def execute(self, command: UpdatePoolLiquidityInput) -> UpdatePoolLiquidityOutput:
        self.calls.append(command)
        return UpdatePoolLiquidityOutput(pool_id=command.pool_id, status=self.status)


def _handler(status: PoolLiquidityStatus = PoolLiquidityStatus.COMMITTED):
    registry = PricingAssetRegistry.from_addresses(pricing_assets=[WETH, USDC], usd_stable_assets=[USDC])
    update_latest_price = RecordingUpdateLatestPrice()
    update_pool_liquidity = RecordingUpdatePoolLiquidity(status)
    handler = ValuationEventHandler(
        usd_valuator=UsdValuator(registry=registry, token_port=FakeTokenPort()),
        update_latest_price_use_case=update_latest_price,
        update_pool_liquidity_use_case=update_pool_liquidity,
    )
    return handler, update_latest_price, update_pool_liquidity


def test_token_price_is_forwarded_to_tracker():
    handler, update_latest_price, _ = _handler()
    token_price = TokenPrice(asset=WETH, pricing_asset=USDC, block=1, pool_id="p", price=Decimal("1"))

    assert handler.handle_token_price(token_price) == "updated"
    assert update_latest_price.calls == [token_price]


def test_swap_is_valued_and_pool_is_revalued():
    handler, _, update_pool_liquidity = _handler()

    result = handler.handle_swap(
        SwapInput(
            pool_id="pool-1",
            token_in=WETH,
            amount_in=Decimal("2"),
            token_out="0x00000000000000000000000000000000000000f1",
            amount_out=Decimal("100"),
            block=10,
            timestamp=1000,
        )
    )

    assert result.value_usd == Decimal("4000")
    assert result.liquidity.committed
    assert update_pool_liquidity.calls == [UpdatePoolLiquidityInput(pool_id="pool-1", block=10, timestamp=1000)]


def test_rejected_revaluation_is_reported_not_raised(caplog):
    handler, _, _ = _handler(PoolLiquidityStatus.SANITY_CHECK_FAILED)

    with caplog.at_level("INFO"):
        result = handler.handle_pool_balance_changed(
            UpdatePoolLiquidityInput(pool_id="pool-1", block=3, timestamp=1000)
        )

    assert not result.committed
    assert "sanity_check_failed" in caplog.text
