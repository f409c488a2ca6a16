"""Source catalog enumeration (schemas and tables).

Queries the Oracle data dictionary through a ``SourceClient``:
- ``ALL_USERS`` for schema owners
- ``ALL_TABLES`` for tables, skipping recycle-bin (``BIN$``) objects

Names in the exclusion set are removed with bound ``NOT IN`` placeholders
and filtered again in Python, so the exclusion invariant does not depend on
the source's collation.  Matching is case-sensitive.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from db_mirror.errors import SchemaDiscoveryError
from db_mirror.schema.identifiers import bind_not_in
from db_mirror.schema.models import TableRef

if TYPE_CHECKING:
    from db_mirror.adapters.base import SourceClient

logger = logging.getLogger(__name__)

RECYCLE_BIN_PREFIX = "BIN$"


def is_recycle_bin_name(table_name: str) -> bool:
    return table_name.startswith(RECYCLE_BIN_PREFIX)


class SchemaIntrospector:
    """Enumerates user schemas and tables on the source.

    Usage:
        introspector = SchemaIntrospector(source, excluded_schemas={"SYS"})
        schemas = introspector.list_schemas()
        tables = introspector.list_tables()
    """

    def __init__(
        self, source: "SourceClient", excluded_schemas: Iterable[str] = ()
    ) -> None:
        self._source = source
        self._excluded: frozenset[str] = frozenset(excluded_schemas)

    @property
    def excluded_schemas(self) -> frozenset[str]:
        return self._excluded

    def list_schemas(self) -> list[str]:
        """Schema owners in source order, minus the exclusion set.

        Raises:
            SchemaDiscoveryError: If the catalog query fails.
        """
        clause, params = bind_not_in("USERNAME", self._excluded, prefix="x")
        where = f" WHERE {clause}" if clause else ""
        query = f"SELECT USERNAME FROM ALL_USERS{where} ORDER BY USERNAME"

        try:
            rows = self._source.query(query, params)
        except Exception as e:
            raise SchemaDiscoveryError(f"Failed to list source schemas: {e}") from e

        schemas = [row[0] for row in rows if row[0] not in self._excluded]
        logger.info("Found %d source schemas", len(schemas))
        logger.debug("Source schemas: %s", ", ".join(schemas))
        return schemas

    def list_tables(self) -> list[TableRef]:
        """User tables in source order, minus excluded owners and recycle bin.

        Raises:
            SchemaDiscoveryError: If the catalog query fails.
        """
        conditions = ["DROPPED = 'NO'", f"TABLE_NAME NOT LIKE '{RECYCLE_BIN_PREFIX}%'"]
        params: dict = {}

        clause, excluded_params = bind_not_in("OWNER", self._excluded, prefix="x")
        if clause:
            conditions.append(clause)
            params.update(excluded_params)

        query = (
            "SELECT OWNER, TABLE_NAME FROM ALL_TABLES WHERE "
            + " AND ".join(conditions)
            + " ORDER BY OWNER, TABLE_NAME"
        )

        try:
            rows = self._source.query(query, params)
        except Exception as e:
            raise SchemaDiscoveryError(f"Failed to list source tables: {e}") from e

        tables = [
            TableRef(schema_name=owner, name=name)
            for owner, name in rows
            if owner not in self._excluded and not is_recycle_bin_name(name)
        ]
        logger.info("Found %d source tables", len(tables))
        return tables
