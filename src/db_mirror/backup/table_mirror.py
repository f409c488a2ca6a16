"""Drop, recreate and refill one target table from the source.

Every run replaces the target table's contents: the table is dropped,
recreated from the source result-set metadata, and refilled in batches.
Nothing is committed here -- the caller owns the transaction and commits
or rolls back per table.

Usage:
    from db_mirror.backup.table_mirror import mirror_table
    from db_mirror.schema.models import TableRef

    rows = mirror_table(source, target, TableRef(schema_name="SALES", name="ORDERS"))
    target.commit()
"""

import logging
from collections.abc import Sequence
from contextlib import closing
from typing import Any

from db_mirror.adapters.base import SourceClient, TargetClient
from db_mirror.adapters.dialects import GENERIC, TargetDialect
from db_mirror.errors import TableBackupError
from db_mirror.schema.identifiers import bind_placeholders, qualified, validate_identifier
from db_mirror.schema.models import ColumnDescriptor, SqlType, TableRef
from db_mirror.schema.type_mapper import map_column_type

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5000


def materialize_value(value: Any, source_type: SqlType) -> Any:
    """Copy a possibly locator-backed value into connection-independent form.

    LOB locators (anything with a ``read()`` method) are read in full;
    character LOBs become ``str`` and binary LOBs become ``bytes``.
    """
    if value is None:
        return None

    if callable(getattr(value, "read", None)):
        value = value.read()

    if source_type in (SqlType.CLOB, SqlType.NCLOB):
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8")
        return str(value)

    if source_type == SqlType.BLOB or isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    return value


def translate_row(
    row: Sequence[Any], columns: Sequence[ColumnDescriptor]
) -> dict[str, Any]:
    """Bind one source row to ``p0..pN`` insert parameters.

    Only LOB columns go through ``materialize_value``; other values are
    bound as returned by the driver.
    """
    if len(row) != len(columns):
        raise ValueError(
            f"Row has {len(row)} values but table has {len(columns)} columns"
        )
    params: dict[str, Any] = {}
    for i, (value, column) in enumerate(zip(row, columns)):
        if column.is_lob or isinstance(value, (bytearray, memoryview)):
            value = materialize_value(value, column.source_type)
        params[f"p{i}"] = value
    return params


def build_create_table(
    table: TableRef,
    columns: Sequence[ColumnDescriptor],
    dialect: TargetDialect = GENERIC,
) -> str:
    """``CREATE TABLE`` with source column names and order preserved."""
    if not columns:
        raise ValueError(f"Source table {table} has no columns")
    column_defs = []
    for column in columns:
        declaration = map_column_type(
            column.source_type,
            precision=column.precision,
            scale=column.scale,
            display_size=column.display_size,
            type_code=column.type_code,
        )
        column_defs.append(
            f"{validate_identifier(column.name)} {dialect.column_type(declaration)}"
        )
    return f"CREATE TABLE {qualified(table)} ({', '.join(column_defs)})"


def build_insert(table: TableRef, columns: Sequence[ColumnDescriptor]) -> str:
    """Positional ``INSERT`` bound to ``:p0, :p1, ...``."""
    names = ", ".join(validate_identifier(c.name) for c in columns)
    placeholders, _ = bind_placeholders((c.name for c in columns), prefix="p")
    return f"INSERT INTO {qualified(table)} ({names}) VALUES ({placeholders})"


def mirror_table(
    source: SourceClient,
    target: TargetClient,
    table: TableRef,
    batch_size: int = DEFAULT_BATCH_SIZE,
    dialect: TargetDialect = GENERIC,
    read_metadata_first: bool = False,
) -> int:
    """Recreate ``table`` on the target and copy all of its rows.

    Steps: drop the target table, read source metadata, create the target
    table, then stream rows and flush them every ``batch_size`` rows.

    By default the target table is dropped before the source metadata is
    read, so a metadata failure leaves the table absent.  With
    ``read_metadata_first=True`` metadata is read first and a metadata
    failure leaves the existing target table untouched.

    Args:
        source: Source database client.
        target: Target database client (transaction owned by the caller).
        table: Table to mirror.
        batch_size: Rows per ``executemany`` flush.
        dialect: Target dialect rendering the DDL.
        read_metadata_first: Read metadata before dropping the target table.

    Returns:
        Number of rows copied.

    Raises:
        TableBackupError: On any metadata, DDL, translation or insert failure.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    name = table.qualified_name
    try:
        select_sql = f"SELECT * FROM {qualified(table)}"
        columns: list[ColumnDescriptor] | None = None

        if read_metadata_first:
            columns = source.describe_query(select_sql)

        target.execute(dialect.drop_table_sql(qualified(table)))

        if columns is None:
            columns = source.describe_query(select_sql)

        target.execute(build_create_table(table, columns, dialect))
        insert_sql = build_insert(table, columns)

        row_count = 0
        flushes = 0
        batch: list[dict[str, Any]] = []
        with closing(source.stream_query(select_sql, batch_size)) as rows:
            for row in rows:
                batch.append(translate_row(row, columns))
                if len(batch) >= batch_size:
                    target.insert_batch(insert_sql, batch)
                    row_count += len(batch)
                    flushes += 1
                    logger.debug("%s: flushed %d rows", name, row_count)
                    batch = []

        if batch:
            target.insert_batch(insert_sql, batch)
            row_count += len(batch)
            flushes += 1

    except TableBackupError:
        raise
    except Exception as e:
        raise TableBackupError(name, e) from e

    logger.debug("%s: %d rows in %d batches", name, row_count, flushes)
    return row_count
