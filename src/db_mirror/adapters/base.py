"""Source and target client protocol definitions.

Defines the ``SourceClient`` and ``TargetClient`` Protocols that the
mirror engine runs against.  The engine never touches a driver directly,
so tests can substitute in-memory fakes.

Usage:
    from db_mirror.adapters.base import SourceClient, TargetClient

    def copy(source: SourceClient, target: TargetClient) -> None:
        for row in source.stream_query("SELECT * FROM SALES.ORDERS", 5000):
            ...
        target.commit()
"""

from collections.abc import Generator
from typing import Any, Protocol

from db_mirror.schema.models import ColumnDescriptor


class SourceClient(Protocol):
    """Read-only interface to the source database."""

    def query(self, sql: str, params: dict[str, Any] | None = None) -> list[tuple]:
        """Run a parametrized query and return all rows as tuples.

        Example:
            rows = source.query(
                "SELECT USERNAME FROM ALL_USERS WHERE USERNAME NOT IN (:x0)",
                {"x0": "SYS"},
            )
        """
        ...

    def describe_query(self, sql: str) -> list[ColumnDescriptor]:
        """Column metadata of a query's result set, without fetching rows."""
        ...

    def stream_query(
        self, sql: str, fetch_size: int
    ) -> Generator[tuple, None, None]:
        """Iterate a query's rows through a forward-only cursor.

        The cursor is released when the generator is exhausted or closed.
        """
        ...


class TargetClient(Protocol):
    """Write interface to the target database.

    Transactions are manual: nothing is persisted until ``commit()``.
    """

    @property
    def dialect_name(self) -> str:
        """SQLAlchemy dialect name of the target (e.g. ``"postgresql"``)."""
        ...

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> None:
        """Execute one DDL or DML statement in the current transaction."""
        ...

    def insert_batch(self, sql: str, rows: list[dict[str, Any]]) -> None:
        """Execute a parametrized INSERT once per row in one round trip."""
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
