from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pool_valuation.core.db import Base


class TokenModel(Base):
    __tablename__ = "tokens"

    address: Mapped[str] = mapped_column(Text, primary_key=True)
    latest_usd_price: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)
    latest_price_id: Mapped[str | None] = mapped_column(Text, nullable=True)


class LatestPriceModel(Base):
    __tablename__ = "latest_prices"
    __table_args__ = (
        UniqueConstraint("asset", "pricing_asset", name="uq_latest_prices_asset_pricing_asset"),
    )

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    asset: Mapped[str] = mapped_column(Text, nullable=False)
    pricing_asset: Mapped[str] = mapped_column(Text, nullable=False)
    block: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    pool_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)


class PoolModel(Base):
    __tablename__ = "pools"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    pool_type: Mapped[str] = mapped_column(Text, nullable=False)
    # JSON array of token addresses, in pool order.
    tokens_list: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    total_shares: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)
    total_liquidity: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)


class PoolTokenModel(Base):
    __tablename__ = "pool_tokens"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    pool_id: Mapped[str] = mapped_column(Text, nullable=False)
    token_address: Mapped[str] = mapped_column(Text, nullable=False)
    balance: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)


class PoolHistoricalLiquidityModel(Base):
    __tablename__ = "pool_historical_liquidity"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    pool_id: Mapped[str] = mapped_column(Text, nullable=False)
    pricing_asset: Mapped[str] = mapped_column(Text, nullable=False)
    block: Mapped[int] = mapped_column(BigInteger, nullable=False)
    pool_total_shares: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    pool_liquidity: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    pool_share_value: Mapped[Decimal] = mapped_column(Numeric, nullable=False)


class BalancerModel(Base):
    __tablename__ = "balancers"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    total_liquidity: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)


class BalancerSnapshotModel(Base):
    __tablename__ = "balancer_snapshots"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    balancer_id: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    total_liquidity: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)


class PoolSnapshotModel(Base):
    __tablename__ = "pool_snapshots"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    pool_id: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    total_shares: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)
    total_liquidity: Mapped[Decimal] = mapped_column(Numeric, nullable=False, default=0)
