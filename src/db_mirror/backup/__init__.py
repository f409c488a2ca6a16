"""Mirror runs: principal provisioning, table copy, and orchestration.

Usage:
    from db_mirror.backup import BackupOrchestrator, run_backup
    from db_mirror.backup import mirror_table, provision_principals
"""

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

__all__ = [
    "BackupOrchestrator",
    "BackupPlan",
    "BackupState",
    "BackupSummary",
    "PrincipalOutcome",
    "TableOutcome",
    "mirror_table",
    "provision_principals",
    "run_backup",
]
