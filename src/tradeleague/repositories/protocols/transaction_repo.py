"""Transaction repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from tradeleague.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for the append-only transaction log."""

    def create(self, transaction: Transaction) -> Transaction:
        """Append a transaction record."""
        ...

    def list_by_account(
        self,
        account_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
        newest_first: bool = False,
    ) -> list[Transaction]:
        """List an account's transactions in log order (or newest first)."""
        ...

    def count_by_account(self, account_id: str) -> int:
        """Number of transactions recorded for an account."""
        ...
