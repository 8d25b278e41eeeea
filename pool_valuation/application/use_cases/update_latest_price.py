from __future__ import annotations

import logging
from dataclasses import replace

from pool_valuation.application.dto.latest_price import UpdateLatestPriceOutput
from pool_valuation.application.ports.latest_price_port import LatestPricePort
from pool_valuation.application.ports.token_port import TokenPort
from pool_valuation.application.ports.unit_of_work_port import UnitOfWorkPort
from pool_valuation.application.use_cases.usd_valuator import UsdValuator
from pool_valuation.domain.entities.latest_price import TokenPrice

logger = logging.getLogger(__name__)


class UpdateLatestPriceUseCase:
    def __init__(
        self,
        *,
        unit_of_work: UnitOfWorkPort,
        latest_price_port: LatestPricePort,
        token_port: TokenPort,
        usd_valuator: UsdValuator,
    ):
        self._unit_of_work = unit_of_work
        self._latest_price_port = latest_price_port
        self._token_port = token_port
        self._usd_valuator = usd_valuator

    def execute(self, token_price: TokenPrice) -> UpdateLatestPriceOutput:
        with self._unit_of_work.transaction():
            return self._execute(token_price)

    def _execute(self, token_price: TokenPrice) -> UpdateLatestPriceOutput:
        latest_price = self._latest_price_port.get_or_create_latest_price(
            asset=token_price.asset,
            pricing_asset=token_price.pricing_asset,
        )
        # Last write wins, even for an older block.
        latest_price = replace(
            latest_price,
            block=token_price.block,
            pool_id=token_price.pool_id,
            price=token_price.price,
        )
        self._latest_price_port.save_latest_price(latest_price)

        token = self._token_port.get_or_create_token(address=token_price.asset)
        token = replace(
            token,
            latest_usd_price=self._usd_valuator.value_in_usd(
                amount=token_price.price,
                asset=token_price.pricing_asset,
            ),
            latest_price_id=latest_price.id,
        )
        self._token_port.save_token(token)

        logger.debug(
            "update_latest_price: id=%s block=%s price=%s usd=%s",
            latest_price.id,
            token_price.block,
            token_price.price,
            token.latest_usd_price,
        )
        return UpdateLatestPriceOutput(latest_price=latest_price, token=token)
