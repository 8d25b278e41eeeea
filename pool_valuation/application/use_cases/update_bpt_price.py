from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from pool_valuation.application.ports.token_port import TokenPort
from pool_valuation.domain.entities.pool import Pool
from pool_valuation.domain.entities.token import Token


class UpdateBptPriceUseCase:
    def __init__(self, *, token_port: TokenPort):
        self._token_port = token_port

    def execute(self, pool: Pool) -> Token | None:
        if pool.total_shares == Decimal("0"):
            return None

        bpt = self._token_port.get_or_create_token(address=pool.address)
        bpt = replace(bpt, latest_usd_price=pool.total_liquidity / pool.total_shares)
        self._token_port.save_token(bpt)
        return bpt
