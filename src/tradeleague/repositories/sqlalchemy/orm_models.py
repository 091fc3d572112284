"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from tradeleague.repositories.sqlalchemy.database import Base
from tradeleague.domain.models.enums import TradeSide


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("cash_balance >= 0", name="ck_accounts_cash_non_negative"),
    )

    # Primary key doubles as the uniqueness guard for create-on-first-access
    account_id = Column(String(64), primary_key=True)
    display_name = Column(String(255), nullable=False)
    cash_balance = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    starting_cash = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    created_at_est = Column(DateTime, nullable=False)
    updated_at_est = Column(DateTime, nullable=True)

    transactions = relationship("TransactionORM", back_populates="account")
    positions = relationship("PositionORM", back_populates="account")


class PositionORM(Base):
    """SQLAlchemy model for Position (materialized from the ledger)."""

    __tablename__ = "positions"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_positions_quantity_non_negative"),
    )

    account_id = Column(String(64), ForeignKey("accounts.account_id"), primary_key=True)
    symbol = Column(String(16), primary_key=True)
    quantity = Column(Integer, nullable=False, default=0)
    average_cost = Column(Numeric(precision=18, scale=6), nullable=False, default=Decimal("0"))
    total_invested = Column(Numeric(precision=18, scale=6), nullable=False, default=Decimal("0"))
    updated_at_est = Column(DateTime, nullable=True)

    account = relationship("AccountORM", back_populates="positions")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only ledger entry)."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_account_time", "account_id", "txn_time_est"),
    )

    txn_id = Column(String(36), primary_key=True)
    # Insertion order; breaks ties between transactions with equal timestamps
    seq = Column(Integer, nullable=False, index=True)
    account_id = Column(String(64), ForeignKey("accounts.account_id"), nullable=False)
    symbol = Column(String(16), nullable=False)
    side = Column(SqlEnum(TradeSide), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(precision=18, scale=4), nullable=False)
    total_value = Column(Numeric(precision=18, scale=4), nullable=False)
    txn_time_est = Column(DateTime, nullable=False)

    account = relationship("AccountORM", back_populates="transactions")
