"""Position repository protocol."""

from typing import Protocol, Optional

from tradeleague.domain.models import Position


class PositionRepository(Protocol):
    """Interface for materialized position data access."""

    def get(self, account_id: str, symbol: str) -> Optional[Position]:
        """Get the position row for a symbol, open or closed."""
        ...

    def upsert(self, position: Position) -> Position:
        """Insert or update a position row."""
        ...

    def list_by_account(self, account_id: str, include_closed: bool = False) -> list[Position]:
        """List positions for an account ordered by symbol."""
        ...

    def list_open_symbols(self) -> list[str]:
        """Distinct symbols held with quantity > 0 by any account."""
        ...

    def delete_by_account(self, account_id: str) -> None:
        """Remove all position rows for an account (for rebuild)."""
        ...
