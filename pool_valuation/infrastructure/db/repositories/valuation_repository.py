from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal

from sqlalchemy import text

from pool_valuation.application.ports.balancer_port import BalancerPort
from pool_valuation.application.ports.latest_price_port import LatestPricePort
from pool_valuation.application.ports.pool_historical_liquidity_port import (
    PoolHistoricalLiquidityPort,
)
from pool_valuation.application.ports.pool_port import PoolPort
from pool_valuation.application.ports.snapshot_port import SnapshotPort
from pool_valuation.application.ports.token_port import TokenPort
from pool_valuation.application.ports.unit_of_work_port import UnitOfWorkPort
from pool_valuation.domain.entities.latest_price import LatestPrice
from pool_valuation.domain.entities.liquidity import (
    Balancer,
    BalancerSnapshot,
    PoolHistoricalLiquidity,
    PoolSnapshot,
)
from pool_valuation.domain.entities.pool import Pool, PoolToken, get_pool_token_id
from pool_valuation.domain.entities.token import Token
from pool_valuation.domain.services.addresses import canonical_address
from pool_valuation.domain.services.latest_prices import get_latest_price_id
from pool_valuation.domain.services.pool_liquidity import get_snapshot_id, snapshot_bucket_start
from pool_valuation.infrastructure.db.mappers.valuation_mapper import (
    decimal_param,
    map_row_to_balancer,
    map_row_to_balancer_snapshot,
    map_row_to_latest_price,
    map_row_to_pool,
    map_row_to_pool_snapshot,
    map_row_to_pool_token,
    map_row_to_token,
)

logger = logging.getLogger(__name__)


class SqlValuationRepository(
    UnitOfWorkPort,
    TokenPort,
    LatestPricePort,
    PoolPort,
    PoolHistoricalLiquidityPort,
    BalancerPort,
    SnapshotPort,
):
    """Entity store backed by SQL tables.

    Inside `transaction()` every call on the same thread shares one
    connection and commits or rolls back together. Outside it each call runs
    in its own transaction.
    """

    def __init__(self, engine, *, snapshot_period_seconds: int = 86400):
        self._engine = engine
        self._snapshot_period_seconds = snapshot_period_seconds
        self._local = threading.local()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if getattr(self._local, "conn", None) is not None:
            yield
            return
        try:
            with self._engine.begin() as conn:
                self._local.conn = conn
                try:
                    yield
                finally:
                    self._local.conn = None
        except Exception as exc:
            logger.warning("valuation_repo: transaction rolled back error=%s", type(exc).__name__)
            raise

    @contextmanager
    def _connection(self):
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            yield conn
            return
        with self._engine.begin() as conn:
            yield conn

    # tokens

    def get_token(self, *, address: str) -> Token | None:
        sql = """
            SELECT address, latest_usd_price, latest_price_id
            FROM tokens
            WHERE address = :address
        """
        with self._connection() as conn:
            row = conn.execute(text(sql), {"address": canonical_address(address)}).mappings().first()
        if row is None:
            return None
        return map_row_to_token(row)

    def get_or_create_token(self, *, address: str) -> Token:
        sql = """
            INSERT INTO tokens (address, latest_usd_price, latest_price_id)
            VALUES (:address, NULL, NULL)
            ON CONFLICT (address) DO NOTHING
        """
        with self.transaction():
            with self._connection() as conn:
                conn.execute(text(sql), {"address": canonical_address(address)})
            token = self.get_token(address=address)
        if token is None:
            raise RuntimeError(f"Token {address} was not persisted.")
        return token

    def save_token(self, token: Token) -> None:
        sql = """
            INSERT INTO tokens (address, latest_usd_price, latest_price_id)
            VALUES (:address, :latest_usd_price, :latest_price_id)
            ON CONFLICT (address) DO UPDATE
            SET latest_usd_price = EXCLUDED.latest_usd_price,
                latest_price_id = EXCLUDED.latest_price_id
        """
        params = {
            "address": canonical_address(token.address),
            "latest_usd_price": decimal_param(token.latest_usd_price),
            "latest_price_id": token.latest_price_id,
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)

    # latest prices

    def get_latest_price(self, *, latest_price_id: str) -> LatestPrice | None:
        sql = """
            SELECT id, asset, pricing_asset, block, pool_id, price
            FROM latest_prices
            WHERE id = :id
        """
        with self._connection() as conn:
            row = conn.execute(text(sql), {"id": latest_price_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_latest_price(row)

    def get_or_create_latest_price(self, *, asset: str, pricing_asset: str) -> LatestPrice:
        latest_price_id = get_latest_price_id(asset, pricing_asset)
        sql = """
            INSERT INTO latest_prices (id, asset, pricing_asset)
            VALUES (:id, :asset, :pricing_asset)
            ON CONFLICT (id) DO NOTHING
        """
        params = {
            "id": latest_price_id,
            "asset": canonical_address(asset),
            "pricing_asset": canonical_address(pricing_asset),
        }
        with self.transaction():
            with self._connection() as conn:
                conn.execute(text(sql), params)
            latest_price = self.get_latest_price(latest_price_id=latest_price_id)
        if latest_price is None:
            raise RuntimeError(f"Latest price {latest_price_id} was not persisted.")
        return latest_price

    def save_latest_price(self, latest_price: LatestPrice) -> None:
        # asset and pricing_asset are fixed when the row is created.
        sql = """
            INSERT INTO latest_prices (id, asset, pricing_asset, block, pool_id, price)
            VALUES (:id, :asset, :pricing_asset, :block, :pool_id, :price)
            ON CONFLICT (id) DO UPDATE
            SET block = EXCLUDED.block,
                pool_id = EXCLUDED.pool_id,
                price = EXCLUDED.price
        """
        params = {
            "id": latest_price.id,
            "asset": canonical_address(latest_price.asset),
            "pricing_asset": canonical_address(latest_price.pricing_asset),
            "block": latest_price.block,
            "pool_id": latest_price.pool_id,
            "price": decimal_param(latest_price.price),
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)

    # pools

    def get_pool(self, *, pool_id: str, for_update: bool = False) -> Pool | None:
        sql = """
            SELECT id, address, pool_type, tokens_list, total_shares, total_liquidity
            FROM pools
            WHERE id = :id
        """
        with self._connection() as conn:
            # SQLite has no row locks; its writers are already serialized.
            if for_update and conn.dialect.name == "postgresql":
                sql += " FOR UPDATE"
            row = conn.execute(text(sql), {"id": pool_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_pool(row)

    def save_pool(self, pool: Pool) -> None:
        sql = """
            INSERT INTO pools (id, address, pool_type, tokens_list, total_shares, total_liquidity)
            VALUES (:id, :address, :pool_type, :tokens_list, :total_shares, :total_liquidity)
            ON CONFLICT (id) DO UPDATE
            SET address = EXCLUDED.address,
                pool_type = EXCLUDED.pool_type,
                tokens_list = EXCLUDED.tokens_list,
                total_shares = EXCLUDED.total_shares,
                total_liquidity = EXCLUDED.total_liquidity
        """
        params = {
            "id": pool.id,
            "address": canonical_address(pool.address),
            "pool_type": pool.pool_type.value,
            "tokens_list": json.dumps([canonical_address(token) for token in pool.tokens_list]),
            "total_shares": decimal_param(pool.total_shares),
            "total_liquidity": decimal_param(pool.total_liquidity),
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)

    def get_pool_token(self, *, pool_id: str, token_address: str) -> PoolToken | None:
        sql = """
            SELECT pool_id, token_address, balance
            FROM pool_tokens
            WHERE id = :id
        """
        with self._connection() as conn:
            row = conn.execute(
                text(sql),
                {"id": get_pool_token_id(pool_id, canonical_address(token_address))},
            ).mappings().first()
        if row is None:
            return None
        return map_row_to_pool_token(row)

    def save_pool_token(self, pool_token: PoolToken) -> None:
        """Balance writes belong to the pool indexer; exposed for seeding."""
        sql = """
            INSERT INTO pool_tokens (id, pool_id, token_address, balance)
            VALUES (:id, :pool_id, :token_address, :balance)
            ON CONFLICT (id) DO UPDATE
            SET balance = EXCLUDED.balance
        """
        params = {
            "id": pool_token.id,
            "pool_id": pool_token.pool_id,
            "token_address": canonical_address(pool_token.token_address),
            "balance": decimal_param(pool_token.balance),
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)

    # pool historical liquidity

    def save_pool_historical_liquidity(self, row: PoolHistoricalLiquidity) -> None:
        sql = """
            INSERT INTO pool_historical_liquidity (
                id, pool_id, pricing_asset, block, pool_total_shares, pool_liquidity, pool_share_value
            ) VALUES (
                :id, :pool_id, :pricing_asset, :block, :pool_total_shares, :pool_liquidity, :pool_share_value
            )
            ON CONFLICT (id) DO UPDATE
            SET pool_total_shares = EXCLUDED.pool_total_shares,
                pool_liquidity = EXCLUDED.pool_liquidity,
                pool_share_value = EXCLUDED.pool_share_value
        """
        params = {
            "id": row.id,
            "pool_id": row.pool_id,
            "pricing_asset": canonical_address(row.pricing_asset),
            "block": row.block,
            "pool_total_shares": decimal_param(row.pool_total_shares),
            "pool_liquidity": decimal_param(row.pool_liquidity),
            "pool_share_value": decimal_param(row.pool_share_value),
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)
        logger.debug("valuation_repo: upsert pool_historical_liquidity id=%s", row.id)

    # global aggregate

    def _ensure_balancer(self, conn, balancer_id: str) -> None:
        sql = """
            INSERT INTO balancers (id, total_liquidity)
            VALUES (:id, 0)
            ON CONFLICT (id) DO NOTHING
        """
        conn.execute(text(sql), {"id": balancer_id})

    def _select_balancer(self, conn, balancer_id: str) -> Balancer:
        sql = """
            SELECT id, total_liquidity
            FROM balancers
            WHERE id = :id
        """
        row = conn.execute(text(sql), {"id": balancer_id}).mappings().one()
        return map_row_to_balancer(row)

    def get_or_create_balancer(self, *, balancer_id: str) -> Balancer:
        with self._connection() as conn:
            self._ensure_balancer(conn, balancer_id)
            return self._select_balancer(conn, balancer_id)

    def add_balancer_liquidity(self, *, balancer_id: str, delta: Decimal) -> Balancer:
        sql = """
            UPDATE balancers
            SET total_liquidity = total_liquidity + CAST(:delta AS NUMERIC)
            WHERE id = :id
        """
        with self._connection() as conn:
            self._ensure_balancer(conn, balancer_id)
            conn.execute(text(sql), {"id": balancer_id, "delta": decimal_param(delta)})
            balancer = self._select_balancer(conn, balancer_id)
        logger.debug(
            "valuation_repo: balancer id=%s delta=%s total=%s",
            balancer_id,
            delta,
            balancer.total_liquidity,
        )
        return balancer

    # snapshots

    def create_pool_snapshot(self, pool: Pool, timestamp: int) -> None:
        sql = """
            INSERT INTO pool_snapshots (id, pool_id, timestamp, total_shares, total_liquidity)
            VALUES (:id, :pool_id, :timestamp, :total_shares, :total_liquidity)
            ON CONFLICT (id) DO UPDATE
            SET total_shares = EXCLUDED.total_shares,
                total_liquidity = EXCLUDED.total_liquidity
        """
        params = {
            "id": get_snapshot_id(pool.id, timestamp, period_seconds=self._snapshot_period_seconds),
            "pool_id": pool.id,
            "timestamp": snapshot_bucket_start(timestamp, period_seconds=self._snapshot_period_seconds),
            "total_shares": decimal_param(pool.total_shares),
            "total_liquidity": decimal_param(pool.total_liquidity),
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)

    def get_pool_snapshot(self, *, pool_id: str, timestamp: int) -> PoolSnapshot | None:
        """Read side of `create_pool_snapshot`, for dashboards and inspection."""
        sql = """
            SELECT id, pool_id, timestamp, total_shares, total_liquidity
            FROM pool_snapshots
            WHERE id = :id
        """
        snapshot_id = get_snapshot_id(pool_id, timestamp, period_seconds=self._snapshot_period_seconds)
        with self._connection() as conn:
            row = conn.execute(text(sql), {"id": snapshot_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_pool_snapshot(row)

    def get_balancer_snapshot(self, *, balancer_id: str, timestamp: int) -> BalancerSnapshot:
        sql = """
            SELECT id, balancer_id, timestamp, total_liquidity
            FROM balancer_snapshots
            WHERE id = :id
        """
        snapshot_id = get_snapshot_id(
            balancer_id,
            timestamp,
            period_seconds=self._snapshot_period_seconds,
        )
        with self._connection() as conn:
            row = conn.execute(text(sql), {"id": snapshot_id}).mappings().first()
        if row is not None:
            return map_row_to_balancer_snapshot(row)
        return BalancerSnapshot(
            id=snapshot_id,
            balancer_id=balancer_id,
            timestamp=snapshot_bucket_start(timestamp, period_seconds=self._snapshot_period_seconds),
        )

    def save_balancer_snapshot(self, snapshot: BalancerSnapshot) -> None:
        sql = """
            INSERT INTO balancer_snapshots (id, balancer_id, timestamp, total_liquidity)
            VALUES (:id, :balancer_id, :timestamp, :total_liquidity)
            ON CONFLICT (id) DO UPDATE
            SET total_liquidity = EXCLUDED.total_liquidity
        """
        params = {
            "id": snapshot.id,
            "balancer_id": snapshot.balancer_id,
            "timestamp": snapshot.timestamp,
            "total_liquidity": decimal_param(snapshot.total_liquidity),
        }
        with self._connection() as conn:
            conn.execute(text(sql), params)
