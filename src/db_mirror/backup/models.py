"""Run outcome models for mirror runs.

A run records one ``PrincipalOutcome`` per user/grant statement and one
``TableOutcome`` per table; ``BackupSummary`` aggregates them.

Usage:
    from db_mirror.backup.models import BackupSummary, TableOutcome

    summary = BackupSummary(schemas=["SALES"])
    summary.tables.append(TableOutcome(table="SALES.ORDERS", row_count=3))
    print(summary.format_report())
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from db_mirror.schema.models import TableRef


class BackupState(str, Enum):
    """Orchestrator lifecycle states, in order."""

    CONNECTING = "connecting"
    SCHEMAS_RESOLVED = "schemas_resolved"
    PRINCIPALS_PROVISIONED = "principals_provisioned"
    TABLES_RESOLVED = "tables_resolved"
    COPYING = "copying"
    DONE = "done"


class BackupPlan(BaseModel):
    """Schemas and tables a run would touch."""

    schemas: list[str] = Field(default_factory=list)
    tables: list[TableRef] = Field(default_factory=list)


class PrincipalOutcome(BaseModel):
    """Result of one principal statement for one schema."""

    schema_name: str
    operation: Literal["create_user", "grant"]
    succeeded: bool = True
    error: str | None = None


class TableOutcome(BaseModel):
    """Result of mirroring one table.

    Example:
        >>> TableOutcome(table="SALES.ORDERS", row_count=3).succeeded
        True
    """

    table: str
    succeeded: bool = True
    row_count: int = 0
    error: str | None = None


class BackupSummary(BaseModel):
    """Aggregated result of a mirror run."""

    schemas: list[str] = Field(default_factory=list)
    principals: list[PrincipalOutcome] = Field(default_factory=list)
    tables: list[TableOutcome] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def tables_attempted(self) -> int:
        return len(self.tables)

    @property
    def tables_succeeded(self) -> int:
        return sum(1 for t in self.tables if t.succeeded)

    @property
    def tables_failed(self) -> list[TableOutcome]:
        return [t for t in self.tables if not t.succeeded]

    @property
    def total_rows(self) -> int:
        """Rows copied by successful tables (failed tables were rolled back)."""
        return sum(t.row_count for t in self.tables if t.succeeded)

    @property
    def principal_warnings(self) -> list[PrincipalOutcome]:
        return [p for p in self.principals if not p.succeeded]

    @property
    def success(self) -> bool:
        """True if every attempted table was copied."""
        return not self.tables_failed

    def format_report(self) -> str:
        """Format the summary as a human-readable report."""
        lines = [
            f"Tables attempted: {self.tables_attempted}",
            f"Tables succeeded: {self.tables_succeeded}",
            f"Total rows: {self.total_rows}",
        ]

        if self.tables_failed:
            lines.append(f"\n  Failed tables ({len(self.tables_failed)}):")
            for outcome in self.tables_failed:
                lines.append(f"    - {outcome.table}: {outcome.error}")

        if self.principal_warnings:
            lines.append(f"\n  Principal warnings ({len(self.principal_warnings)}):")
            for outcome in self.principal_warnings:
                lines.append(
                    f"    - {outcome.schema_name} {outcome.operation}: {outcome.error}"
                )

        return "\n".join(lines)
