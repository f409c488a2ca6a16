"""Source column metadata to target column type declarations.

Pure logic -- no I/O, no database connections.

``map_column_type`` never raises: anything it does not recognize degrades
to ``VARCHAR(MAX)`` with a warning, so one exotic column cannot abort a
table copy.

Usage:
    from db_mirror.schema.models import SqlType
    from db_mirror.schema.type_mapper import describe_columns, map_column_type

    map_column_type(SqlType.NUMERIC, precision=9, scale=0)
    # 'INT'

    with source_cursor() as cur:
        cur.execute("SELECT * FROM SALES.ORDERS WHERE 1 = 0")
        columns = describe_columns(cur.description)
"""

import logging
from collections.abc import Sequence
from typing import Any

from db_mirror.schema.models import ColumnDescriptor, SqlType

logger = logging.getLogger(__name__)

MAX_VARCHAR_LENGTH = 4000
UNMAPPED_TYPE = "VARCHAR(MAX)"

_PASS_THROUGH = {
    SqlType.INTEGER,
    SqlType.BIGINT,
    SqlType.SMALLINT,
    SqlType.TINYINT,
    SqlType.FLOAT,
    SqlType.DOUBLE,
    SqlType.REAL,
}

# python-oracledb DbType names, DB-API type objects and plain type names
_TYPE_CODE_NAMES: dict[str, SqlType] = {
    "DB_TYPE_VARCHAR": SqlType.VARCHAR,
    "DB_TYPE_NVARCHAR": SqlType.NVARCHAR,
    "DB_TYPE_LONG": SqlType.VARCHAR,
    "DB_TYPE_CHAR": SqlType.CHAR,
    "DB_TYPE_NCHAR": SqlType.NCHAR,
    "DB_TYPE_NUMBER": SqlType.NUMERIC,
    "DB_TYPE_BINARY_INTEGER": SqlType.INTEGER,
    "DB_TYPE_BINARY_FLOAT": SqlType.FLOAT,
    "DB_TYPE_BINARY_DOUBLE": SqlType.DOUBLE,
    "DB_TYPE_DATE": SqlType.DATE,
    "DB_TYPE_TIMESTAMP": SqlType.TIMESTAMP,
    "DB_TYPE_TIMESTAMP_TZ": SqlType.TIMESTAMP_WITH_TIMEZONE,
    "DB_TYPE_TIMESTAMP_LTZ": SqlType.TIMESTAMP_WITH_TIMEZONE,
    "DB_TYPE_BLOB": SqlType.BLOB,
    "DB_TYPE_CLOB": SqlType.CLOB,
    "DB_TYPE_NCLOB": SqlType.NCLOB,
    "DB_TYPE_BOOLEAN": SqlType.BOOLEAN,
    "VARCHAR": SqlType.VARCHAR,
    "VARCHAR2": SqlType.VARCHAR,
    "NVARCHAR2": SqlType.NVARCHAR,
    "STRING": SqlType.VARCHAR,
    "CHAR": SqlType.CHAR,
    "FIXED_CHAR": SqlType.CHAR,
    "NUMBER": SqlType.NUMERIC,
    "NUMERIC": SqlType.NUMERIC,
    "DECIMAL": SqlType.DECIMAL,
    "INTEGER": SqlType.INTEGER,
    "INT": SqlType.INTEGER,
    "BIGINT": SqlType.BIGINT,
    "SMALLINT": SqlType.SMALLINT,
    "TINYINT": SqlType.TINYINT,
    "FLOAT": SqlType.FLOAT,
    "DOUBLE": SqlType.DOUBLE,
    "REAL": SqlType.REAL,
    "DATE": SqlType.DATE,
    "DATETIME": SqlType.TIMESTAMP,
    "TIMESTAMP": SqlType.TIMESTAMP,
    "BLOB": SqlType.BLOB,
    "CLOB": SqlType.CLOB,
    "NCLOB": SqlType.NCLOB,
    "BOOLEAN": SqlType.BOOLEAN,
}


def type_code_name(type_code: Any) -> str:
    """Readable name for a DB-API type code (``DbType.name`` or ``str()``)."""
    if type_code is None:
        return ""
    if isinstance(type_code, SqlType):
        return type_code.value
    name = getattr(type_code, "name", None)
    if isinstance(name, str):
        return name
    return str(type_code)


def classify_type_code(type_code: Any) -> SqlType:
    """Map a raw DB-API type code to a ``SqlType`` category.

    Unknown codes (including ``None``) classify as ``SqlType.OTHER``.
    """
    if isinstance(type_code, SqlType):
        return type_code
    return _TYPE_CODE_NAMES.get(type_code_name(type_code).upper(), SqlType.OTHER)


def describe_columns(description: Sequence[Sequence[Any]]) -> list[ColumnDescriptor]:
    """Convert a DB-API ``cursor.description`` into column descriptors.

    DB-API 7-tuples are ``(name, type_code, display_size, internal_size,
    precision, scale, null_ok)``; missing trailing items are treated as
    unknown.
    """
    columns: list[ColumnDescriptor] = []
    for entry in description:
        fields = list(entry) + [None] * (7 - len(entry))
        name, type_code, display_size, internal_size, precision, scale = fields[:6]
        columns.append(
            ColumnDescriptor(
                name=name,
                source_type=classify_type_code(type_code),
                type_code=type_code_name(type_code),
                precision=precision,
                scale=scale,
                display_size=display_size if display_size is not None else internal_size,
            )
        )
    return columns


def map_column_type(
    source_type: SqlType | str,
    precision: int | None = None,
    scale: int | None = None,
    display_size: int | None = None,
    type_code: str | None = None,
) -> str:
    """Target column type declaration for one source column.

    Args:
        source_type: Source type category, or a raw type name such as
            ``"VARCHAR2"`` which is classified first.
        precision: Declared precision (numeric types).
        scale: Declared scale (numeric types).
        display_size: Display size (character types).
        type_code: Raw driver type name, only used in the unmapped warning.

    Returns:
        Non-empty type declaration such as ``"VARCHAR(50)"`` or ``"INT"``.

    Examples:
        >>> map_column_type(SqlType.VARCHAR, display_size=50)
        'VARCHAR(50)'
        >>> map_column_type(SqlType.NUMERIC, precision=12, scale=0)
        'BIGINT'
        >>> map_column_type(SqlType.NUMERIC, precision=10, scale=2)
        'DECIMAL(10, 2)'
    """
    raw_type = source_type
    source_type = classify_type_code(source_type)

    if source_type in (SqlType.VARCHAR, SqlType.NVARCHAR):
        if not display_size or display_size <= 0:
            return f"VARCHAR({MAX_VARCHAR_LENGTH})"
        return f"VARCHAR({min(display_size, MAX_VARCHAR_LENGTH)})"

    if source_type in (SqlType.CHAR, SqlType.NCHAR):
        if not display_size or display_size <= 0:
            return "CHAR(1)"
        return f"CHAR({display_size})"

    if source_type in (SqlType.NUMERIC, SqlType.DECIMAL):
        return _map_exact_numeric(precision, scale)

    if source_type in _PASS_THROUGH:
        return source_type.value

    if source_type in (
        SqlType.DATE,
        SqlType.TIMESTAMP,
        SqlType.TIMESTAMP_WITH_TIMEZONE,
    ):
        # Time zone is dropped
        return "TIMESTAMP"

    if source_type == SqlType.BLOB:
        return "BLOB"

    if source_type in (SqlType.CLOB, SqlType.NCLOB):
        return "CLOB"

    if source_type == SqlType.BOOLEAN:
        return "BOOLEAN"

    logger.warning(
        "Unmapped source type %s, falling back to %s",
        type_code or type_code_name(raw_type),
        UNMAPPED_TYPE,
    )
    return UNMAPPED_TYPE


def _map_exact_numeric(precision: int | None, scale: int | None) -> str:
    """NUMBER/DECIMAL rules (precision 0 or negative scale means undeclared)."""
    precision = precision or 0
    scale = scale or 0

    if precision <= 0 or scale < 0:
        return "DECIMAL"
    if scale > 0:
        return f"DECIMAL({precision}, {scale})"
    if precision <= 9:
        return "INT"
    if precision <= 18:
        return "BIGINT"
    return f"DECIMAL({precision}, {scale})"
