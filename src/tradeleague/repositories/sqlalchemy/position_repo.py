"""SQLAlchemy implementation of PositionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from tradeleague.core.timezone import now_eastern, to_eastern, to_naive_eastern
from tradeleague.domain.models import Position
from tradeleague.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository. Writes are flushed, not committed."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, account_id: str, symbol: str) -> Optional[Position]:
        """Get the position row for a symbol, open or closed."""
        orm_pos = self._get_orm(account_id, symbol)
        return self._to_domain(orm_pos) if orm_pos else None

    def upsert(self, position: Position) -> Position:
        """Insert or update a position row."""
        orm_pos = self._get_orm(position.account_id, position.symbol)
        updated_at = to_naive_eastern(position.updated_at_est or now_eastern())

        if orm_pos:
            orm_pos.quantity = position.quantity
            orm_pos.average_cost = position.average_cost
            orm_pos.total_invested = position.total_invested
            orm_pos.updated_at_est = updated_at
        else:
            orm_pos = PositionORM(
                account_id=position.account_id,
                symbol=position.symbol,
                quantity=position.quantity,
                average_cost=position.average_cost,
                total_invested=position.total_invested,
                updated_at_est=updated_at,
            )
            self._db.add(orm_pos)

        self._db.flush()
        return self._to_domain(orm_pos)

    def list_by_account(self, account_id: str, include_closed: bool = False) -> list[Position]:
        """List positions for an account ordered by symbol."""
        query = self._db.query(PositionORM).filter(PositionORM.account_id == account_id)
        if not include_closed:
            query = query.filter(PositionORM.quantity > 0)
        return [self._to_domain(p) for p in query.order_by(PositionORM.symbol).all()]

    def list_open_symbols(self) -> list[str]:
        """Distinct symbols held with quantity > 0 by any account."""
        rows = (
            self._db.query(PositionORM.symbol)
            .filter(PositionORM.quantity > 0)
            .distinct()
            .order_by(PositionORM.symbol)
            .all()
        )
        return [row[0] for row in rows]

    def delete_by_account(self, account_id: str) -> None:
        """Remove all position rows for an account (for rebuild)."""
        self._db.query(PositionORM).filter(
            PositionORM.account_id == account_id
        ).delete()
        self._db.flush()

    def _get_orm(self, account_id: str, symbol: str) -> Optional[PositionORM]:
        return (
            self._db.query(PositionORM)
            .filter(
                PositionORM.account_id == account_id,
                PositionORM.symbol == symbol,
            )
            .first()
        )

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM position to domain model."""
        return Position(
            account_id=orm.account_id,
            symbol=orm.symbol,
            quantity=int(orm.quantity or 0),
            average_cost=Decimal(str(orm.average_cost)) if orm.average_cost else Decimal("0"),
            total_invested=Decimal(str(orm.total_invested)) if orm.total_invested else Decimal("0"),
            updated_at_est=to_eastern(orm.updated_at_est) if orm.updated_at_est else None,
        )
