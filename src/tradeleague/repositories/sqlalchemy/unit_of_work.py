"""SQLAlchemy unit of work."""

from sqlalchemy.orm import Session


class SqlAlchemyUnitOfWork:
    """
    Commit-or-rollback boundary over one session.

    Entering expires the identity map so reads inside the block see the
    latest committed state.
    """

    def __init__(self, db: Session):
        self._db = db

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._db.expire_all()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()
