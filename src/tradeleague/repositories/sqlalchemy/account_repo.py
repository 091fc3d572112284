"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from tradeleague.core.exceptions import AccountNotFoundError
from tradeleague.core.timezone import now_eastern, to_eastern, to_naive_eastern
from tradeleague.domain.models import Account
from tradeleague.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository. Writes are flushed, not committed."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Stage a new account (IntegrityError on duplicate id at flush)."""
        orm_account = AccountORM(
            account_id=account.account_id,
            display_name=account.display_name,
            cash_balance=account.cash_balance,
            starting_cash=account.starting_cash,
            created_at_est=to_naive_eastern(account.created_at_est or now_eastern()),
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._get_orm(account_id)
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts ordered by id."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.account_id).all()
        return [self._to_domain(a) for a in orm_accounts]

    def update_cash(self, account_id: str, delta: Decimal) -> Account:
        """Add delta to the cash balance."""
        orm_account = self._get_orm(account_id)
        if not orm_account:
            raise AccountNotFoundError(account_id)
        current = Decimal(str(orm_account.cash_balance))
        orm_account.cash_balance = current + delta
        orm_account.updated_at_est = to_naive_eastern(now_eastern())
        self._db.flush()
        return self._to_domain(orm_account)

    def update_profile(self, account_id: str, display_name: str) -> Account:
        """Change the display name of an account."""
        orm_account = self._get_orm(account_id)
        if not orm_account:
            raise AccountNotFoundError(account_id)
        orm_account.display_name = display_name
        orm_account.updated_at_est = to_naive_eastern(now_eastern())
        self._db.flush()
        return self._to_domain(orm_account)

    def _get_orm(self, account_id: str) -> Optional[AccountORM]:
        return self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            display_name=orm.display_name,
            cash_balance=Decimal(str(orm.cash_balance)) if orm.cash_balance else Decimal("0"),
            starting_cash=Decimal(str(orm.starting_cash)) if orm.starting_cash else Decimal("0"),
            created_at_est=to_eastern(orm.created_at_est) if orm.created_at_est else None,
            updated_at_est=to_eastern(orm.updated_at_est) if orm.updated_at_est else None,
        )
