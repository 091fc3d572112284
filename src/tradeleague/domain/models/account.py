"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Account:
    """
    A player's trading account.

    The id is owned by the external auth collaborator. Cash never goes
    negative; it changes only when a trade settles.
    """

    account_id: str
    display_name: str
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    starting_cash: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at_est: Optional[datetime] = field(default=None)
    updated_at_est: Optional[datetime] = field(default=None)
