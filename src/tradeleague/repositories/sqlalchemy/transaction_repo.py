"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from tradeleague.core.timezone import to_eastern, to_naive_eastern
from tradeleague.domain.models import Transaction
from tradeleague.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed append-only transaction log."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Append a transaction (flushed; committed by the unit of work)."""
        orm_txn = TransactionORM(
            txn_id=transaction.txn_id,
            seq=self.count_by_account(transaction.account_id) + 1,
            account_id=transaction.account_id,
            symbol=transaction.symbol,
            side=transaction.side,
            quantity=transaction.quantity,
            price=transaction.price,
            total_value=transaction.total_value,
            txn_time_est=to_naive_eastern(transaction.txn_time_est),
        )
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def list_by_account(
        self,
        account_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
        newest_first: bool = False,
    ) -> list[Transaction]:
        """List an account's transactions in log order (or newest first)."""
        query = self._db.query(TransactionORM).filter(
            TransactionORM.account_id == account_id
        )
        if since is not None:
            query = query.filter(
                TransactionORM.txn_time_est >= to_naive_eastern(since)
            )
        if newest_first:
            query = query.order_by(TransactionORM.seq.desc())
        else:
            query = query.order_by(TransactionORM.seq)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def count_by_account(self, account_id: str) -> int:
        """Number of transactions recorded for an account."""
        return (
            self._db.query(func.count(TransactionORM.txn_id))
            .filter(TransactionORM.account_id == account_id)
            .scalar()
        ) or 0

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            account_id=orm.account_id,
            symbol=orm.symbol,
            side=orm.side,
            quantity=int(orm.quantity),
            price=Decimal(str(orm.price)),
            total_value=Decimal(str(orm.total_value)),
            txn_time_est=to_eastern(orm.txn_time_est),
        )
