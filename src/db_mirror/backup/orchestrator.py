"""Backup orchestration: schemas, principals, then tables one at a time.

States progress ``CONNECTING -> SCHEMAS_RESOLVED -> PRINCIPALS_PROVISIONED
-> TABLES_RESOLVED -> COPYING -> DONE``.  Connection, schema discovery and
schema creation failures are fatal and propagate to the caller.  A table
failure rolls back that table's transaction and the run moves on; each
successful table is committed immediately.  While copying, ``current_table``
and ``current_index`` (1-based) name the table in progress.

Usage:
    from db_mirror.backup.orchestrator import BackupOrchestrator, run_backup
    from db_mirror.config import load_mirror_config

    config = load_mirror_config()
    summary = run_backup(config)
    print(summary.format_report())

    # Or with custom clients (tests, embedding)
    orchestrator = BackupOrchestrator(
        config,
        source_factory=lambda: my_source,
        target_factory=lambda: my_target,
    )
    summary = orchestrator.run()
"""

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, ExitStack
from datetime import datetime

from db_mirror.adapters.base import SourceClient, TargetClient
from db_mirror.adapters.dialects import TargetDialect
from db_mirror.backup.models import BackupPlan, BackupState, BackupSummary, TableOutcome
from db_mirror.backup.provisioner import provision_principals
from db_mirror.backup.table_mirror import mirror_table
from db_mirror.config.models import MirrorConfig
from db_mirror.errors import ConnectivityError, TableBackupError
from db_mirror.factory import create_source, create_target, target_dialect
from db_mirror.schema.introspector import SchemaIntrospector
from db_mirror.schema.models import TableRef

logger = logging.getLogger(__name__)

SourceFactory = Callable[[], AbstractContextManager[SourceClient]]
TargetFactory = Callable[[], AbstractContextManager[TargetClient]]


class BackupOrchestrator:
    """Runs one full mirror of the source into the target.

    Args:
        config: Mirror configuration (passed explicitly, never looked up).
        source_factory: Zero-argument callable returning an unopened source
            client context manager.  Defaults to the configured profile.
        target_factory: Same for the target client.
    """

    def __init__(
        self,
        config: MirrorConfig,
        source_factory: SourceFactory | None = None,
        target_factory: TargetFactory | None = None,
    ) -> None:
        self._config = config
        self._source_factory = source_factory or (lambda: create_source(config))
        self._target_factory = target_factory or (lambda: create_target(config))
        self.state = BackupState.CONNECTING
        self.current_table: TableRef | None = None
        self.current_index = 0

    def run(self) -> BackupSummary:
        """Mirror every non-excluded table.

        Returns:
            ``BackupSummary`` with per-principal and per-table outcomes.

        Raises:
            ConnectivityError: If either database cannot be opened.
            SchemaDiscoveryError: If the source catalog cannot be read.
            SchemaProvisioningError: If a target schema cannot be created.
        """
        config = self._config
        summary = BackupSummary()
        self.state = BackupState.CONNECTING

        with ExitStack() as stack:
            source, target = self._connect(stack)
            introspector = SchemaIntrospector(source, config.excluded_schemas)

            summary.schemas = introspector.list_schemas()
            self.state = BackupState.SCHEMAS_RESOLVED

            dialect = target_dialect(config.target_profile, target.dialect_name)
            summary.principals = provision_principals(
                target, summary.schemas, config.principal_password, dialect
            )
            self.state = BackupState.PRINCIPALS_PROVISIONED

            tables = self._resolve_tables(introspector, summary.schemas)
            self.state = BackupState.TABLES_RESOLVED

            self.state = BackupState.COPYING
            for i, table in enumerate(tables, 1):
                self.current_table, self.current_index = table, i
                logger.info("[%d/%d] Mirroring %s", i, len(tables), table)
                summary.tables.append(self._copy_table(source, target, table, dialect))

        self.current_table = None
        summary.finished_at = datetime.now()
        self.state = BackupState.DONE
        logger.info(
            "Backup finished: %d/%d tables, %d rows",
            summary.tables_succeeded,
            summary.tables_attempted,
            summary.total_rows,
        )
        return summary

    def plan(self) -> BackupPlan:
        """Schemas and tables a run would mirror (source only, no writes).

        Raises:
            ConnectivityError: If the source cannot be opened.
            SchemaDiscoveryError: If the source catalog cannot be read.
        """
        with ExitStack() as stack:
            try:
                source = stack.enter_context(self._source_factory())
            except Exception as e:
                raise ConnectivityError(f"Failed to connect to source: {e}") from e

            introspector = SchemaIntrospector(source, self._config.excluded_schemas)
            schemas = introspector.list_schemas()
            tables = self._resolve_tables(introspector, schemas)

        return BackupPlan(schemas=schemas, tables=tables)

    def _connect(self, stack: ExitStack) -> tuple[SourceClient, TargetClient]:
        """Open both connections, registering them on ``stack`` for cleanup."""
        try:
            source = stack.enter_context(self._source_factory())
        except Exception as e:
            raise ConnectivityError(f"Failed to connect to source: {e}") from e
        try:
            target = stack.enter_context(self._target_factory())
        except Exception as e:
            raise ConnectivityError(f"Failed to connect to target: {e}") from e
        return source, target

    def _resolve_tables(
        self, introspector: SchemaIntrospector, schemas: list[str]
    ) -> list[TableRef]:
        """Source tables owned by one of the resolved schemas."""
        wanted = set(schemas)
        return [t for t in introspector.list_tables() if t.schema_name in wanted]

    def _copy_table(
        self,
        source: SourceClient,
        target: TargetClient,
        table: TableRef,
        dialect: TargetDialect,
    ) -> TableOutcome:
        """Mirror one table in its own transaction."""
        try:
            row_count = mirror_table(
                source,
                target,
                table,
                batch_size=self._config.batch_size,
                dialect=dialect,
                read_metadata_first=self._config.read_metadata_first,
            )
            try:
                target.commit()
            except Exception as e:
                raise TableBackupError(table.qualified_name, e) from e
        except TableBackupError as e:
            logger.error("%s", e)
            try:
                target.rollback()
            except Exception as rollback_error:
                raise ConnectivityError(
                    f"Rollback after failed table {table} also failed: {rollback_error}"
                ) from rollback_error
            return TableOutcome(
                table=table.qualified_name, succeeded=False, error=str(e.cause)
            )

        logger.info("%s: %d rows copied", table, row_count)
        return TableOutcome(table=table.qualified_name, row_count=row_count)


def run_backup(config: MirrorConfig) -> BackupSummary:
    """Run a full mirror using the configured source and target profiles."""
    return BackupOrchestrator(config).run()
