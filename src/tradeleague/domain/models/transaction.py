"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from tradeleague.domain.models.enums import TradeSide


@dataclass(frozen=True)
class Transaction:
    """
    Ledger entry (source of truth), append-only.

    Records are never edited or deleted; positions and cash are derived
    from ``starting_cash`` plus the ordered log.
    """

    txn_id: str
    account_id: str
    symbol: str
    side: TradeSide
    quantity: int
    price: Decimal
    total_value: Decimal
    txn_time_est: datetime

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", TradeSide(self.side))

    @property
    def net_cash_impact(self) -> Decimal:
        """
        Net cash impact of this transaction.

        Positive = cash added, Negative = cash removed.
        """
        if self.side == TradeSide.BUY:
            return -self.total_value
        return self.total_value
