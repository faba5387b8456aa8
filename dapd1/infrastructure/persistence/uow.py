"""Unit of work over the catalog connection."""

from sqlalchemy.engine import Connection, RootTransaction

from dapd1.domain.shared.uow import UoW


class SqlUnitOfWork(UoW):
    """Explicit transaction on a single connection.

    Reads made outside a unit of work leave SQLAlchemy's implicit transaction
    open; it holds no writes, so it is rolled back before the explicit one
    begins.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self._transaction: RootTransaction | None = None

    def begin(self) -> None:
        if self._transaction is not None:
            raise RuntimeError("unit of work is already active")
        if self.connection.in_transaction():
            self.connection.rollback()
        self._transaction = self.connection.begin()

    def commit(self) -> None:
        if self._transaction is not None:
            self._transaction.commit()
            self._transaction = None

    def rollback(self) -> None:
        if self._transaction is not None:
            self._transaction.rollback()
            self._transaction = None
