"""Pydantic models for source catalog metadata.

This module contains schema-domain models:
- ``SqlType``: source column type categories
- ``TableRef``: qualified source/target table identifier
- ``ColumnDescriptor``: one column of a source result set

Run outcome models (``TableOutcome``, ``PrincipalOutcome``,
``BackupSummary``) live in db_mirror.backup.models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SqlType(str, Enum):
    """Source column type categories used by the type mapper."""

    VARCHAR = "VARCHAR"
    NVARCHAR = "NVARCHAR"
    CHAR = "CHAR"
    NCHAR = "NCHAR"
    NUMERIC = "NUMERIC"
    DECIMAL = "DECIMAL"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    SMALLINT = "SMALLINT"
    TINYINT = "TINYINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    REAL = "REAL"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_WITH_TIMEZONE = "TIMESTAMP_WITH_TIMEZONE"
    BLOB = "BLOB"
    CLOB = "CLOB"
    NCLOB = "NCLOB"
    BOOLEAN = "BOOLEAN"
    OTHER = "OTHER"


class TableRef(BaseModel):
    """Qualified table identifier, identical on source and target.

    Example:
        >>> TableRef(schema_name="SALES", name="ORDERS").qualified_name
        'SALES.ORDERS'
    """

    model_config = ConfigDict(frozen=True)

    schema_name: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}"

    def __str__(self) -> str:
        return self.qualified_name


class ColumnDescriptor(BaseModel):
    """One column of a source result set.

    Built from a DB-API ``cursor.description`` entry; ``type_code`` keeps
    the driver's raw type name for diagnostics.
    """

    name: str
    source_type: SqlType
    type_code: str = ""
    precision: int | None = None
    scale: int | None = None
    display_size: int | None = None

    @property
    def is_lob(self) -> bool:
        return self.source_type in (SqlType.BLOB, SqlType.CLOB, SqlType.NCLOB)
