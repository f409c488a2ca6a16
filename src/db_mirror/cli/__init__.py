"""CLI module for mirroring a source database into a target database.

Provides commands for listing profiles, previewing a run, running the
mirror, and exporting an ad-hoc query as CSV.

Usage:
    db-mirror profiles
    db-mirror plan
    db-mirror run --yes
    db-mirror run --batch-size 1000
    db-mirror export queries/orders.sql --output orders.csv
    db-mirror --config /etc/db-mirror.toml --verbose run --yes

Commands:
    profiles  - List configured profiles
    plan      - List the schemas and tables a run would mirror
    run       - Drop, recreate and refill every target table
    export    - Run a SQL file against the source and write CSV
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from db_mirror.backup.models import BackupSummary
from db_mirror.backup.orchestrator import BackupOrchestrator
from db_mirror.config.loader import load_mirror_config
from db_mirror.config.models import MirrorConfig
from db_mirror.errors import MirrorError
from db_mirror.export import export_query, read_sql_file
from db_mirror.factory import ProfileNotFoundError, create_source

console = Console()
# Diagnostics go to stderr so `export` can stream CSV to stdout
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_config(args: argparse.Namespace) -> MirrorConfig | None:
    """Load config from ``--config``/env; print the error and return None on failure."""
    config_path = Path(args.config) if getattr(args, "config", None) else None
    try:
        return load_mirror_config(config_path, env_prefix=getattr(args, "env_prefix", ""))
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        return None


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _print_summary(summary: BackupSummary) -> None:
    table = Table(title="Mirror Summary", show_header=True, header_style="bold")
    table.add_column("Table")
    table.add_column("Status")
    table.add_column("Rows", justify="right")
    table.add_column("Error")

    for outcome in summary.tables:
        status = "[green]OK[/green]" if outcome.succeeded else "[red]FAILED[/red]"
        table.add_row(
            outcome.table,
            status,
            str(outcome.row_count) if outcome.succeeded else "-",
            outcome.error or "",
        )

    console.print(table)
    console.print(
        f"Tables attempted: [bold]{summary.tables_attempted}[/bold]  "
        f"succeeded: [bold green]{summary.tables_succeeded}[/bold green]  "
        f"total rows: [bold]{summary.total_rows}[/bold]"
    )

    for warning in summary.principal_warnings:
        console.print(
            f"[yellow]Principal {warning.operation} failed for "
            f"{warning.schema_name}: {warning.error}[/yellow]"
        )


# ============================================================================
# Command implementations
# ============================================================================


def cmd_profiles(args: argparse.Namespace) -> int:
    """List configured profiles.

    Reads only local TOML config -- no database calls.

    Returns:
        0 on success, 1 if the config cannot be loaded.
    """
    config = _load_config(args)
    if config is None:
        return 1

    table = Table(title="Database Profiles", show_header=True, header_style="bold")
    table.add_column("Role", width=6)
    table.add_column("Profile")
    table.add_column("Provider")
    table.add_column("Description")

    for name, profile in config.profiles.items():
        role = ""
        if name == config.source:
            role = "[bold cyan]source[/bold cyan]"
        elif name == config.target:
            role = "[bold magenta]target[/bold magenta]"
        table.add_row(role, name, profile.provider, profile.description or "")

    console.print(table)
    return 0


def cmd_plan(args: argparse.Namespace) -> int:
    """List the schemas and tables a run would mirror (source only)."""
    config = _load_config(args)
    if config is None:
        return 1

    try:
        plan = BackupOrchestrator(config).plan()
    except MirrorError as e:
        err_console.print(f"[bold red]x[/bold red] {e}")
        return 1

    console.print(f"Schemas ({len(plan.schemas)}): {', '.join(plan.schemas)}")

    table = Table(title="Tables to mirror", show_header=True, header_style="bold")
    table.add_column("Schema")
    table.add_column("Table")
    for ref in plan.tables:
        table.add_row(ref.schema_name, ref.name)
    console.print(table)
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run the mirror.

    Returns:
        0 if every table was copied, 1 on any table failure or fatal error.
    """
    config = _load_config(args)
    if config is None:
        return 1

    if args.batch_size is not None:
        config = config.model_copy(update={"batch_size": args.batch_size})

    if not args.yes:
        console.print(
            f"[yellow]This drops and recreates every mirrored table in "
            f"'{config.target}'.[/yellow]"
        )
        response = input("Continue? [y/N] ")
        if response.lower() not in ["y", "yes"]:
            console.print("Cancelled.")
            return 0

    try:
        summary = BackupOrchestrator(config).run()
    except MirrorError as e:
        err_console.print(f"[bold red]x[/bold red] Backup aborted: {e}")
        return 1

    _print_summary(summary)
    return 0 if summary.success else 1


def cmd_export(args: argparse.Namespace) -> int:
    """Run a SQL file against the source and write the result as CSV."""
    config = _load_config(args)
    if config is None:
        return 1

    try:
        sql = read_sql_file(args.sql_file)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        source = create_source(config, args.profile)
    except ProfileNotFoundError as e:
        err_console.print(f"[red]Error: {e.args[0]}[/red]")
        return 1

    try:
        with source:
            if args.output:
                with open(args.output, "w", newline="") as f:
                    count = export_query(source, sql, f)
            else:
                count = export_query(source, sql, sys.stdout)
    except Exception as e:
        err_console.print(f"[bold red]x[/bold red] Export failed: {e}")
        return 1

    err_console.print(f"[green]v[/green] Exported {count} rows")
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="db-mirror",
        description="Mirror source database schemas and tables into a target database",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to db-mirror.toml (default: $DB_MIRROR_CONFIG or ./db-mirror.toml)",
    )
    parser.add_argument(
        "--env-prefix",
        default="",
        help=(
            "Prefix for environment variable lookup "
            "(e.g., --env-prefix APP_ reads APP_DB_MIRROR_CONFIG)"
        ),
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # profiles command
    p_profiles = subparsers.add_parser("profiles", help="List configured profiles")
    p_profiles.set_defaults(func=cmd_profiles)

    # plan command
    p_plan = subparsers.add_parser(
        "plan", help="List the schemas and tables a run would mirror"
    )
    p_plan.set_defaults(func=cmd_plan)

    # run command
    p_run = subparsers.add_parser(
        "run", help="Drop, recreate and refill every target table"
    )
    p_run.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Rows per insert batch (overrides config)",
    )
    p_run.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Skip confirmation prompt",
    )
    p_run.set_defaults(func=cmd_run)

    # export command
    p_export = subparsers.add_parser(
        "export", help="Run a SQL file against the source and write CSV"
    )
    p_export.add_argument("sql_file", help="Path to a file with one SQL statement")
    p_export.add_argument(
        "--output", "-o", help="CSV output file (default: stdout)"
    )
    p_export.add_argument(
        "--profile", "-p", help="Profile to query (default: configured source)"
    )
    p_export.set_defaults(func=cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
