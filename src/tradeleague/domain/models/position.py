"""Position domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Position:
    """
    Materialized holding per account/symbol, maintained from the ledger.

    Weighted-average cost: average_cost is recomputed on buys only.
    A position with quantity 0 is closed and kept for reuse; it is never
    listed as a holding.
    """

    account_id: str
    symbol: str
    quantity: int = 0
    average_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    updated_at_est: Optional[datetime] = field(default=None)

    @property
    def is_open(self) -> bool:
        return self.quantity > 0
