"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from tradeleague.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Stage a new account; the account id must be unique."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts ordered by account id."""
        ...

    def update_cash(self, account_id: str, delta: Decimal) -> Account:
        """Add delta (may be negative) to the account's cash balance."""
        ...

    def update_profile(self, account_id: str, display_name: str) -> Account:
        """Change profile fields of an existing account."""
        ...
