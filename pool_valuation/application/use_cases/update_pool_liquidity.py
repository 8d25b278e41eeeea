from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal

from pool_valuation.application.dto.pool_liquidity import (
    PoolLiquidityStatus,
    UpdatePoolLiquidityInput,
    UpdatePoolLiquidityOutput,
)
from pool_valuation.application.ports.balancer_port import BalancerPort
from pool_valuation.application.ports.pool_historical_liquidity_port import (
    PoolHistoricalLiquidityPort,
)
from pool_valuation.application.ports.pool_port import PoolPort
from pool_valuation.application.ports.snapshot_port import SnapshotPort
from pool_valuation.application.ports.unit_of_work_port import UnitOfWorkPort
from pool_valuation.application.use_cases.update_bpt_price import UpdateBptPriceUseCase
from pool_valuation.application.use_cases.usd_valuator import UsdValuator
from pool_valuation.domain.entities.liquidity import PoolHistoricalLiquidity
from pool_valuation.domain.entities.pool import Pool
from pool_valuation.domain.services.addresses import canonical_address
from pool_valuation.domain.services.pool_liquidity import (
    calculate_pool_share_value,
    get_pool_historical_liquidity_id,
    liquidity_sign_changed,
)
from pool_valuation.domain.services.pool_variants import has_virtual_supply
from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry

logger = logging.getLogger(__name__)


class UpdatePoolLiquidityUseCase:
    def __init__(
        self,
        *,
        unit_of_work: UnitOfWorkPort,
        registry: PricingAssetRegistry,
        pool_port: PoolPort,
        historical_liquidity_port: PoolHistoricalLiquidityPort,
        balancer_port: BalancerPort,
        snapshot_port: SnapshotPort,
        usd_valuator: UsdValuator,
        update_bpt_price_use_case: UpdateBptPriceUseCase,
        balancer_id: str = "2",
    ):
        self._unit_of_work = unit_of_work
        self._registry = registry
        self._pool_port = pool_port
        self._historical_liquidity_port = historical_liquidity_port
        self._balancer_port = balancer_port
        self._snapshot_port = snapshot_port
        self._usd_valuator = usd_valuator
        self._update_bpt_price_use_case = update_bpt_price_use_case
        self._balancer_id = balancer_id

    def execute(self, command: UpdatePoolLiquidityInput) -> UpdatePoolLiquidityOutput:
        with self._unit_of_work.transaction():
            return self._execute(command)

    def _execute(self, command: UpdatePoolLiquidityInput) -> UpdatePoolLiquidityOutput:
        pool = self._pool_port.get_pool(pool_id=command.pool_id, for_update=True)
        if pool is None:
            logger.info("update_pool_liquidity: pool not found pool_id=%s", command.pool_id)
            return UpdatePoolLiquidityOutput(
                pool_id=command.pool_id,
                status=PoolLiquidityStatus.POOL_NOT_FOUND,
            )
        if len(pool.tokens_list) < 2:
            logger.info(
                "update_pool_liquidity: not enough tokens pool_id=%s tokens=%s",
                pool.id,
                len(pool.tokens_list),
            )
            return UpdatePoolLiquidityOutput(
                pool_id=pool.id,
                status=PoolLiquidityStatus.NOT_ENOUGH_TOKENS,
            )

        old_liquidity = pool.total_liquidity
        new_liquidity = self._accumulate_pool_value(pool)

        if liquidity_sign_changed(old_liquidity=old_liquidity, new_liquidity=new_liquidity):
            logger.warning(
                "update_pool_liquidity: sanity check failed pool_id=%s block=%s old=%s new=%s",
                pool.id,
                command.block,
                old_liquidity,
                new_liquidity,
            )
            return UpdatePoolLiquidityOutput(
                pool_id=pool.id,
                status=PoolLiquidityStatus.SANITY_CHECK_FAILED,
                old_liquidity=old_liquidity,
                new_liquidity=new_liquidity,
            )

        liquidity_change = new_liquidity - old_liquidity
        self._commit(
            pool=pool,
            new_liquidity=new_liquidity,
            liquidity_change=liquidity_change,
            block=command.block,
            timestamp=command.timestamp,
        )
        logger.debug(
            "update_pool_liquidity: committed pool_id=%s block=%s liquidity=%s change=%s",
            pool.id,
            command.block,
            new_liquidity,
            liquidity_change,
        )
        return UpdatePoolLiquidityOutput(
            pool_id=pool.id,
            status=PoolLiquidityStatus.COMMITTED,
            old_liquidity=old_liquidity,
            new_liquidity=new_liquidity,
            liquidity_change=liquidity_change,
        )

    def _accumulate_pool_value(self, pool: Pool) -> Decimal:
        skip_own_token = has_virtual_supply(pool)
        pool_address = canonical_address(pool.address)

        total = Decimal("0")
        for token_address in pool.tokens_list:
            if skip_own_token and canonical_address(token_address) == pool_address:
                continue
            pool_token = self._pool_port.get_pool_token(pool_id=pool.id, token_address=token_address)
            if pool_token is None:
                continue
            total += self._usd_valuator.value_in_usd(amount=pool_token.balance, asset=token_address)
        return total

    def _commit(
        self,
        *,
        pool: Pool,
        new_liquidity: Decimal,
        liquidity_change: Decimal,
        block: int,
        timestamp: int,
    ) -> None:
        pricing_asset = self._registry.primary_usd_stable
        self._historical_liquidity_port.save_pool_historical_liquidity(
            PoolHistoricalLiquidity(
                id=get_pool_historical_liquidity_id(pool.id, pricing_asset, block),
                pool_id=pool.id,
                pricing_asset=pricing_asset,
                block=block,
                pool_total_shares=pool.total_shares,
                pool_liquidity=new_liquidity,
                pool_share_value=calculate_pool_share_value(
                    pool_liquidity=new_liquidity,
                    total_shares=pool.total_shares,
                ),
            )
        )

        pool = replace(pool, total_liquidity=new_liquidity)
        self._pool_port.save_pool(pool)

        self._update_bpt_price_use_case.execute(pool)
        self._snapshot_port.create_pool_snapshot(pool, timestamp)

        balancer = self._balancer_port.add_balancer_liquidity(
            balancer_id=self._balancer_id,
            delta=liquidity_change,
        )

        snapshot = self._snapshot_port.get_balancer_snapshot(
            balancer_id=balancer.id,
            timestamp=timestamp,
        )
        self._snapshot_port.save_balancer_snapshot(
            replace(snapshot, total_liquidity=balancer.total_liquidity)
        )
