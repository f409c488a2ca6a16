"""SQLAlchemy-backed source database adapter.

Provides ``SourceDatabase``, an implementation of the ``SourceClient``
protocol.  One connection is held open for the lifetime of the ``with``
block; large result sets are read through a server-side, forward-only
cursor (``stream_results`` + ``yield_per``).

Usage:
    from db_mirror.adapters.source import SourceDatabase

    with SourceDatabase("oracle+oracledb://scott:tiger@db/?service_name=ORCL") as source:
        owners = source.query("SELECT USERNAME FROM ALL_USERS")
        columns = source.describe_query("SELECT * FROM SALES.ORDERS")
        for row in source.stream_query("SELECT * FROM SALES.ORDERS", 5000):
            ...
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from db_mirror.adapters.engine import create_engine_pooled
from db_mirror.schema.models import ColumnDescriptor
from db_mirror.schema.type_mapper import describe_columns


class SourceDatabase:
    """Read-only source connection.

    Args:
        database_url: SQLAlchemy connection URL.
        **engine_kwargs: Forwarded to ``create_engine_pooled``.
    """

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine: Engine = create_engine_pooled(database_url, **engine_kwargs)
        self._conn: Connection | None = None

    def __enter__(self) -> "SourceDatabase":
        """Context manager entry - opens connection."""
        self._conn = self._engine.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes connection and disposes the pool."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        self._engine.dispose()

    def _connection(self) -> Connection:
        if self._conn is None:
            raise RuntimeError("Source not connected. Use with statement.")
        return self._conn

    def query(self, sql: str, params: dict[str, Any] | None = None) -> list[tuple]:
        """Run a parametrized query and return all rows as tuples."""
        result = self._connection().execute(text(sql), params or {})
        return [tuple(row) for row in result]

    def describe_query(self, sql: str) -> list[ColumnDescriptor]:
        """Column metadata for ``sql`` via an empty wrapping query."""
        result = self._connection().execute(
            text(f"SELECT * FROM ({sql}) q WHERE 1 = 0")
        )
        try:
            return describe_columns(result.cursor.description)
        finally:
            result.close()

    def stream_query(
        self, sql: str, fetch_size: int
    ) -> Generator[tuple, None, None]:
        """Yield rows of ``sql`` from a forward-only server-side cursor."""
        statement = text(sql).execution_options(
            stream_results=True, yield_per=fetch_size
        )
        result = self._connection().execute(statement)
        try:
            for row in result:
                yield tuple(row)
        finally:
            result.close()
