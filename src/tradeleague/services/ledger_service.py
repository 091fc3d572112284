"""Position ledger: applies trades to cash, positions and the transaction log."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from tradeleague.core.exceptions import AccountNotFoundError
from tradeleague.core.locks import AccountLockRegistry
from tradeleague.core.timezone import now_eastern
from tradeleague.domain.models import Account, Position, TradeSide, Transaction
from tradeleague.providers.market_data_provider import normalize_symbol
from tradeleague.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    TransactionRepository,
    UnitOfWork,
)
from tradeleague.services.validator import TradeValidator, to_price

logger = logging.getLogger(__name__)

COST_QUANTUM = Decimal("0.000001")


def apply_buy_to_position(position: Position, quantity: int, price: Decimal) -> Position:
    """
    Weighted-average cost after buying ``quantity`` at ``price``.

    new_avg = (old_qty * old_avg + qty * price) / (old_qty + qty)
    """
    new_quantity = position.quantity + quantity
    cost_before = position.average_cost * position.quantity
    new_average = ((cost_before + quantity * price) / new_quantity).quantize(
        COST_QUANTUM, rounding=ROUND_HALF_UP
    )
    return Position(
        account_id=position.account_id,
        symbol=position.symbol,
        quantity=new_quantity,
        average_cost=new_average,
        total_invested=new_average * new_quantity,
    )


def apply_sell_to_position(position: Position, quantity: int) -> Position:
    """Reduce quantity; average cost is unchanged, invested shrinks proportionally."""
    new_quantity = position.quantity - quantity
    return Position(
        account_id=position.account_id,
        symbol=position.symbol,
        quantity=new_quantity,
        average_cost=position.average_cost,
        total_invested=position.average_cost * new_quantity,
    )


class PositionLedger:
    """
    Service for applying trades to the ledger.

    The transaction log is the source of truth; positions and cash are
    maintained alongside it and can be rebuilt by replaying the log.
    Every mutation of an account runs under that account's lock and inside
    a single unit of work, so cash, position and log change together or
    not at all.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        position_repo: PositionRepository,
        transaction_repo: TransactionRepository,
        unit_of_work: UnitOfWork,
        locks: AccountLockRegistry,
        validator: Optional[TradeValidator] = None,
    ):
        self._account_repo = account_repo
        self._position_repo = position_repo
        self._transaction_repo = transaction_repo
        self._uow = unit_of_work
        self._locks = locks
        self._validator = validator or TradeValidator()

    def apply_buy(self, account_id: str, symbol: str, quantity: int, price: Decimal) -> Transaction:
        """Buy ``quantity`` shares at ``price``: debit cash, grow position, append log."""
        return self._apply(TradeSide.BUY, account_id, symbol, quantity, price)

    def apply_sell(self, account_id: str, symbol: str, quantity: int, price: Decimal) -> Transaction:
        """Sell ``quantity`` shares at ``price``: credit cash, shrink position, append log."""
        return self._apply(TradeSide.SELL, account_id, symbol, quantity, price)

    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        account = self._account_repo.get_by_id(account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def get_positions(self, account_id: str) -> list[Position]:
        """Open positions (quantity > 0) for an account, sorted by symbol."""
        self.get_account(account_id)
        return self._position_repo.list_by_account(account_id)

    def get_position(self, account_id: str, symbol: str) -> Optional[Position]:
        """Open position for one symbol, or None when not held."""
        position = self._position_repo.get(account_id, normalize_symbol(symbol))
        return position if position and position.is_open else None

    def get_cash_balance(self, account_id: str) -> Decimal:
        return self.get_account(account_id).cash_balance

    def snapshot(self, account_id: str) -> tuple[Account, list[Position]]:
        """Cash and open positions read together under the account lock."""
        with self._locks.hold(account_id), self._uow:
            account = self.get_account(account_id)
            positions = self._position_repo.list_by_account(account_id)
        return account, positions

    def list_transactions(
        self,
        account_id: str,
        limit: Optional[int] = 50,
        since: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Transaction history, newest first."""
        self.get_account(account_id)
        return self._transaction_repo.list_by_account(
            account_id,
            limit=limit,
            since=since,
            newest_first=True,
        )

    def rebuild_account(self, account_id: str) -> list[Position]:
        """
        Rebuild positions and cash for an account by replaying the log.

        Starts from the account's starting cash; closed positions are kept
        with zero quantity. Returns the open positions after rebuild.
        """
        with self._locks.hold(account_id), self._uow:
            account = self.get_account(account_id)
            transactions = self._transaction_repo.list_by_account(account_id)

            positions: dict[str, Position] = {}
            cash_balance = account.starting_cash
            for txn in transactions:
                position = positions.get(txn.symbol) or Position(account_id, txn.symbol)
                if txn.side == TradeSide.BUY:
                    positions[txn.symbol] = apply_buy_to_position(position, txn.quantity, txn.price)
                else:
                    positions[txn.symbol] = apply_sell_to_position(position, txn.quantity)
                cash_balance += txn.net_cash_impact

            self._position_repo.delete_by_account(account_id)
            rebuild_time = now_eastern()
            for position in positions.values():
                position.updated_at_est = rebuild_time
                self._position_repo.upsert(position)

            delta = cash_balance - account.cash_balance
            if delta:
                logger.warning(
                    "Rebuild of %s corrected cash by %s", account_id, delta
                )
                self._account_repo.update_cash(account_id, delta)

        return sorted(
            (p for p in positions.values() if p.is_open),
            key=lambda p: p.symbol,
        )

    def _apply(
        self,
        side: TradeSide,
        account_id: str,
        symbol: str,
        quantity: int,
        price: Decimal,
    ) -> Transaction:
        symbol = normalize_symbol(symbol)
        shape = self._validator.validate_order(quantity, price)
        if not shape.is_valid:
            raise shape.error
        price = to_price(price)

        with self._locks.hold(account_id), self._uow:
            account = self.get_account(account_id)
            position = self._position_repo.get(account_id, symbol) or Position(account_id, symbol)

            self._validator.ensure_valid(
                side,
                quantity,
                price,
                cash_balance=account.cash_balance,
                held_quantity=position.quantity,
                symbol=symbol,
            )

            total_value = quantity * price
            if side == TradeSide.BUY:
                updated = apply_buy_to_position(position, quantity, price)
                cash_delta = -total_value
            else:
                updated = apply_sell_to_position(position, quantity)
                cash_delta = total_value

            executed_at = now_eastern()
            updated.updated_at_est = executed_at
            self._account_repo.update_cash(account_id, cash_delta)
            self._position_repo.upsert(updated)
            transaction = self._transaction_repo.create(
                Transaction(
                    txn_id=str(uuid.uuid4()),
                    account_id=account_id,
                    symbol=symbol,
                    side=side,
                    quantity=quantity,
                    price=price,
                    total_value=total_value,
                    txn_time_est=executed_at,
                )
            )

        logger.info(
            "%s %s %d %s @ %s (total %s)",
            account_id, side.value, quantity, symbol, price, total_value,
        )
        return transaction
