from __future__ import annotations

import logging
from threading import Lock

from pool_valuation.application.dto.latest_price import UpdateLatestPriceOutput
from pool_valuation.application.dto.pool_liquidity import (
    UpdatePoolLiquidityInput,
    UpdatePoolLiquidityOutput,
)
from pool_valuation.application.dto.swap import SwapInput, SwapValuation
from pool_valuation.application.use_cases.update_latest_price import UpdateLatestPriceUseCase
from pool_valuation.application.use_cases.update_pool_liquidity import UpdatePoolLiquidityUseCase
from pool_valuation.application.use_cases.usd_valuator import UsdValuator
from pool_valuation.domain.entities.latest_price import TokenPrice

logger = logging.getLogger(__name__)


class ValuationEventHandler:
    """Entry point for decoded events.

    Every handler runs to completion under one lock, so concurrent callers see
    the same ordering as a single-threaded event log consumer.
    """

    def __init__(
        self,
        *,
        usd_valuator: UsdValuator,
        update_latest_price_use_case: UpdateLatestPriceUseCase,
        update_pool_liquidity_use_case: UpdatePoolLiquidityUseCase,
        lock: Lock | None = None,
    ):
        self._usd_valuator = usd_valuator
        self._update_latest_price_use_case = update_latest_price_use_case
        self._update_pool_liquidity_use_case = update_pool_liquidity_use_case
        self._lock = lock if lock is not None else Lock()

    def handle_token_price(self, token_price: TokenPrice) -> UpdateLatestPriceOutput:
        with self._lock:
            return self._update_latest_price_use_case.execute(token_price)

    def handle_pool_balance_changed(
        self,
        command: UpdatePoolLiquidityInput,
    ) -> UpdatePoolLiquidityOutput:
        with self._lock:
            return self._revalue_pool(command)

    def handle_swap(self, swap: SwapInput) -> SwapValuation:
        with self._lock:
            value_usd = self._usd_valuator.swap_value_in_usd(
                token_in=swap.token_in,
                amount_in=swap.amount_in,
                token_out=swap.token_out,
                amount_out=swap.amount_out,
            )
            liquidity = self._revalue_pool(
                UpdatePoolLiquidityInput(
                    pool_id=swap.pool_id,
                    block=swap.block,
                    timestamp=swap.timestamp,
                )
            )
        logger.debug(
            "handle_swap: pool_id=%s block=%s value_usd=%s",
            swap.pool_id,
            swap.block,
            value_usd,
        )
        return SwapValuation(value_usd=value_usd, liquidity=liquidity)

    def _revalue_pool(self, command: UpdatePoolLiquidityInput) -> UpdatePoolLiquidityOutput:
        result = self._update_pool_liquidity_use_case.execute(command)
        if not result.committed:
            logger.info(
                "valuation_events: pool liquidity not updated pool_id=%s block=%s status=%s",
                command.pool_id,
                command.block,
                result.status.value,
            )
        return result
