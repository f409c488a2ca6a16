"""Target schema and principal provisioning.

For each source schema, in order:

1. ``CREATE SCHEMA IF NOT EXISTS`` -- fatal on failure
   (``SchemaProvisioningError``); tables cannot be created without it.
2. Create a login/role named after the schema with the shared password --
   non-fatal, the principal may already exist from a previous run.
3. ``GRANT ALL ON SCHEMA`` to that principal -- non-fatal.

Non-fatal failures are returned as ``PrincipalOutcome`` results rather
than raised.  Every statement is committed on success and rolled back on
failure so one failed statement does not abort the next.
"""

import logging
from collections.abc import Iterable
from typing import Literal

from db_mirror.adapters.base import TargetClient
from db_mirror.adapters.dialects import GENERIC, TargetDialect
from db_mirror.backup.models import PrincipalOutcome
from db_mirror.errors import PrincipalProvisioningError, SchemaProvisioningError
from db_mirror.schema.identifiers import validate_identifier

logger = logging.getLogger(__name__)


def provision_principals(
    target: TargetClient,
    schemas: Iterable[str],
    password: str,
    dialect: TargetDialect = GENERIC,
) -> list[PrincipalOutcome]:
    """Ensure a target schema and owning principal exist per source schema.

    Args:
        target: Target database client.
        schemas: Source schema names, processed in the given order.
        password: Shared password for every provisioned principal.
        dialect: Target dialect rendering the DDL.

    Returns:
        One ``PrincipalOutcome`` per user/grant statement.

    Raises:
        SchemaProvisioningError: If a target schema cannot be created (or
            its name fails identifier validation).
    """
    outcomes: list[PrincipalOutcome] = []

    for schema in schemas:
        try:
            validate_identifier(schema)
            target.execute(dialect.create_schema_sql(schema))
            target.commit()
        except Exception as e:
            _rollback_quietly(target)
            raise SchemaProvisioningError(schema, e) from e

        outcomes.append(
            _attempt(
                target, schema, "create_user", dialect.create_user_sql(schema, password)
            )
        )
        outcomes.append(_attempt(target, schema, "grant", dialect.grant_sql(schema)))

    return outcomes


def _attempt(
    target: TargetClient,
    schema: str,
    operation: Literal["create_user", "grant"],
    sql: str,
) -> PrincipalOutcome:
    """Run one non-fatal principal statement and record its outcome."""
    try:
        target.execute(sql)
        target.commit()
    except Exception as e:
        _rollback_quietly(target)
        error = PrincipalProvisioningError(schema, operation, e)
        logger.warning("%s", error)
        return PrincipalOutcome(
            schema_name=schema, operation=operation, succeeded=False, error=str(e)
        )

    logger.debug("%s succeeded for %s", operation, schema)
    return PrincipalOutcome(schema_name=schema, operation=operation)


def _rollback_quietly(target: TargetClient) -> None:
    try:
        target.rollback()
    except Exception as e:
        logger.debug("Rollback after provisioning failure also failed: %s", e)
