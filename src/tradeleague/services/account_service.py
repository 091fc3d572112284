"""Account service: creation on first sign-in, lookup and profile updates."""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError

from tradeleague.core.exceptions import AccountNotFoundError, InvalidInputError
from tradeleague.core.locks import AccountLockRegistry
from tradeleague.core.timezone import now_eastern
from tradeleague.domain.models import Account
from tradeleague.repositories.protocols import AccountRepository, UnitOfWork

logger = logging.getLogger(__name__)

MAX_ACCOUNT_ID_LENGTH = 64
MAX_DISPLAY_NAME_LENGTH = 100


class AccountService:
    """
    Service for managing player accounts.

    Account ids come from the external auth collaborator; ``ensure_account``
    is safe to call on every sign-in.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        unit_of_work: UnitOfWork,
        locks: AccountLockRegistry,
        starting_cash: Decimal = Decimal("10000.00"),
    ):
        self._account_repo = account_repo
        self._uow = unit_of_work
        self._locks = locks
        self._starting_cash = starting_cash

    def ensure_account(
        self,
        account_id: str,
        display_name: Optional[str] = None,
        initial_cash: Optional[Decimal] = None,
    ) -> Account:
        """
        Return the account, creating it with starting cash if it does not exist.

        Idempotent. The primary key guards against a concurrent creator in
        another process; losing that race re-reads the winner's row.
        """
        account_id = self._validate_account_id(account_id)
        name = self._validate_display_name(display_name or account_id)
        cash = self._validate_initial_cash(initial_cash)

        with self._locks.hold(account_id):
            try:
                with self._uow:
                    existing = self._account_repo.get_by_id(account_id)
                    if existing:
                        return existing
                    account = self._account_repo.create(
                        Account(
                            account_id=account_id,
                            display_name=name,
                            cash_balance=cash,
                            starting_cash=cash,
                            created_at_est=now_eastern(),
                        )
                    )
            except IntegrityError:
                logger.info("Account %s created concurrently, re-reading", account_id)
                existing = self._account_repo.get_by_id(account_id)
                if existing is None:
                    raise
                return existing

        logger.info("Created account %s with %s cash", account_id, cash)
        return account

    def create_account(
        self,
        display_name: str,
        initial_cash: Optional[Decimal] = None,
    ) -> Account:
        """Create an account under a freshly generated id."""
        return self.ensure_account(
            str(uuid.uuid4()),
            display_name=self._validate_display_name(display_name),
            initial_cash=initial_cash,
        )

    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        account = self._account_repo.get_by_id(account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        return self._account_repo.list_all()

    def update_profile(self, account_id: str, display_name: str) -> Account:
        """Change the display name; cash and holdings are untouched."""
        name = self._validate_display_name(display_name)
        with self._locks.hold(account_id), self._uow:
            return self._account_repo.update_profile(account_id, name)

    @staticmethod
    def _validate_account_id(account_id: str) -> str:
        account_id = (account_id or "").strip()
        if not account_id:
            raise InvalidInputError("Account id is required")
        if len(account_id) > MAX_ACCOUNT_ID_LENGTH:
            raise InvalidInputError(
                f"Account id must be at most {MAX_ACCOUNT_ID_LENGTH} characters"
            )
        return account_id

    @staticmethod
    def _validate_display_name(display_name: str) -> str:
        name = (display_name or "").strip()
        if not name:
            raise InvalidInputError("Display name is required")
        if len(name) > MAX_DISPLAY_NAME_LENGTH:
            raise InvalidInputError(
                f"Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters"
            )
        return name

    def _validate_initial_cash(self, initial_cash: Optional[Decimal]) -> Decimal:
        if initial_cash is None:
            return self._starting_cash
        try:
            cash = Decimal(str(initial_cash))
        except ArithmeticError:
            raise InvalidInputError(f"Invalid initial cash: {initial_cash!r}") from None
        if not cash.is_finite() or cash < 0:
            raise InvalidInputError(f"Initial cash must be non-negative, got {initial_cash!r}")
        return cash
