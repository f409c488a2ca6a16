"""Source catalog introspection and column type mapping.

Provides schema/table enumeration (``SchemaIntrospector``), column type
mapping (``map_column_type``, ``describe_columns``) and identifier
validation for dynamic SQL.

Usage:
    from db_mirror.schema import SchemaIntrospector, map_column_type
    from db_mirror.schema import TableRef, ColumnDescriptor, SqlType
"""

from db_mirror.schema.identifiers import (
    bind_not_in,
    bind_placeholders,
    qualified,
    validate_identifier,
)
from db_mirror.schema.introspector import SchemaIntrospector
from db_mirror.schema.models import ColumnDescriptor, SqlType, TableRef
from db_mirror.schema.type_mapper import (
    classify_type_code,
    describe_columns,
    map_column_type,
)

__all__ = [
    "SchemaIntrospector",
    "ColumnDescriptor",
    "SqlType",
    "TableRef",
    "map_column_type",
    "classify_type_code",
    "describe_columns",
    "validate_identifier",
    "qualified",
    "bind_placeholders",
    "bind_not_in",
]
