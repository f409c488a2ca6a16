"""db-mirror: Mirror source database schemas and tables into another database.

Discovers the user schemas and tables of a source database, recreates them
on a target database of a different dialect, and copies every row in
batches, one transaction per table.

Usage:
    from db_mirror import load_mirror_config, run_backup
    from db_mirror import BackupOrchestrator, BackupSummary
    from db_mirror import map_column_type, SqlType
"""

__version__ = "0.1.0"

# Adapters
from db_mirror.adapters.base import SourceClient, TargetClient
from db_mirror.adapters.source import SourceDatabase
from db_mirror.adapters.target import TargetDatabase

# Config
from db_mirror.config.loader import load_mirror_config
from db_mirror.config.models import DatabaseProfile, MirrorConfig

# Factory
from db_mirror.factory import (
    ProfileNotFoundError,
    create_source,
    create_target,
    resolve_url,
)

# Schema
from db_mirror.schema.introspector import SchemaIntrospector
from db_mirror.schema.models import ColumnDescriptor, SqlType, TableRef
from db_mirror.schema.type_mapper import map_column_type

# Backup
from db_mirror.backup.models import (
    BackupPlan,
    BackupState,
    BackupSummary,
    PrincipalOutcome,
    TableOutcome,
)
from db_mirror.backup.orchestrator import BackupOrchestrator, run_backup
from db_mirror.backup.provisioner import provision_principals
from db_mirror.backup.table_mirror import mirror_table

# Errors
from db_mirror.errors import (
    ConnectivityError,
    InvalidIdentifierError,
    MirrorError,
    PrincipalProvisioningError,
    SchemaDiscoveryError,
    SchemaProvisioningError,
    TableBackupError,
)

__all__ = [
    # Adapters
    "SourceClient",
    "TargetClient",
    "SourceDatabase",
    "TargetDatabase",
    # Config
    "load_mirror_config",
    "DatabaseProfile",
    "MirrorConfig",
    # Factory
    "create_source",
    "create_target",
    "resolve_url",
    "ProfileNotFoundError",
    # Schema
    "SchemaIntrospector",
    "ColumnDescriptor",
    "SqlType",
    "TableRef",
    "map_column_type",
    # Backup
    "BackupOrchestrator",
    "BackupPlan",
    "BackupState",
    "BackupSummary",
    "PrincipalOutcome",
    "TableOutcome",
    "mirror_table",
    "provision_principals",
    "run_backup",
    # Errors
    "MirrorError",
    "ConnectivityError",
    "SchemaDiscoveryError",
    "SchemaProvisioningError",
    "PrincipalProvisioningError",
    "TableBackupError",
    "InvalidIdentifierError",
]
