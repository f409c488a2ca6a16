"""Export the result of an ad-hoc SQL query as CSV.

Usage:
    from db_mirror.export import export_query, read_sql_file

    sql = read_sql_file("queries/open_orders.sql")
    with create_source(config) as source, open("orders.csv", "w", newline="") as f:
        rows = export_query(source, sql, f)
"""

import csv
from contextlib import closing
from pathlib import Path
from typing import Any, TextIO

from db_mirror.adapters.base import SourceClient
from db_mirror.backup.table_mirror import materialize_value


def read_sql_file(path: str | Path) -> str:
    """Read one SQL statement from a file, without its trailing ``;``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file contains no SQL.
    """
    sql_path = Path(path)
    if not sql_path.exists():
        raise FileNotFoundError(f"SQL file not found: {sql_path}")

    sql = sql_path.read_text().strip().rstrip(";").strip()
    if not sql:
        raise ValueError(f"No SQL statement found in {sql_path.name}")
    return sql


def _csv_value(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.hex()
    return value


def export_query(
    source: SourceClient,
    sql: str,
    stream: TextIO,
    fetch_size: int = 1000,
) -> int:
    """Write the header and all rows of ``sql`` to ``stream`` as CSV.

    LOB values are materialized first; binary values are written as hex.

    Returns:
        Number of data rows written.
    """
    columns = source.describe_query(sql)
    writer = csv.writer(stream)
    writer.writerow([c.name for c in columns])

    count = 0
    with closing(source.stream_query(sql, fetch_size)) as rows:
        for row in rows:
            writer.writerow(
                [
                    _csv_value(materialize_value(value, column.source_type))
                    for value, column in zip(row, columns)
                ]
            )
            count += 1
    return count
