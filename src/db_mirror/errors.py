"""Error taxonomy for mirror runs.

Fatal errors (``ConnectivityError``, ``SchemaDiscoveryError``,
``SchemaProvisioningError``) unwind to the run boundary.  Recoverable
errors (``PrincipalProvisioningError``, ``TableBackupError``) are caught
at the narrowest scope and recorded in the run summary.

Usage:
    from db_mirror.errors import MirrorError, TableBackupError

    try:
        summary = run_backup(config)
    except MirrorError as e:
        print(f"Backup aborted: {e}")
"""


class MirrorError(Exception):
    """Base class for all db-mirror errors."""

    pass


class ConnectivityError(MirrorError):
    """Raised when the source or target database cannot be reached."""

    pass


class SchemaDiscoveryError(MirrorError):
    """Raised when the source catalog cannot be queried."""

    pass


class SchemaProvisioningError(MirrorError):
    """Raised when a target schema cannot be created."""

    def __init__(self, schema: str, cause: BaseException) -> None:
        self.schema = schema
        self.cause = cause
        super().__init__(f"Failed to create target schema '{schema}': {cause}")


class PrincipalProvisioningError(MirrorError):
    """A user/grant statement failed for a schema (non-fatal)."""

    def __init__(self, schema: str, operation: str, cause: BaseException) -> None:
        self.schema = schema
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed for '{schema}': {cause}")


class TableBackupError(MirrorError):
    """Copying one table failed; the run continues with the next table.

    Attributes:
        table: Qualified table name (``SCHEMA.TABLE``).
        cause: The underlying exception.
    """

    def __init__(self, table: str, cause: BaseException) -> None:
        self.table = table
        self.cause = cause
        super().__init__(f"Backup of table '{table}' failed: {cause}")


class InvalidIdentifierError(MirrorError, ValueError):
    """Raised when a schema, table, or column name fails the allow-list."""

    pass
