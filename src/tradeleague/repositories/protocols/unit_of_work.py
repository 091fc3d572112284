"""Unit of work protocol."""

from typing import Protocol


class UnitOfWork(Protocol):
    """
    Transaction boundary around repository writes.

    Used as a context manager: commits when the block exits normally,
    rolls back when it raises.
    """

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
