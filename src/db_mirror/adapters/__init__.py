"""Database adapters package.

Provides the ``SourceClient``/``TargetClient`` Protocols, their
SQLAlchemy-backed implementations, and target dialect DDL rules.

Usage:
    from db_mirror.adapters import SourceDatabase, TargetDatabase, get_dialect
"""

from db_mirror.adapters.base import SourceClient, TargetClient
from db_mirror.adapters.dialects import GENERIC, POSTGRES, TargetDialect, get_dialect
from db_mirror.adapters.source import SourceDatabase
from db_mirror.adapters.target import TargetDatabase

__all__ = [
    "SourceClient",
    "TargetClient",
    "SourceDatabase",
    "TargetDatabase",
    "TargetDialect",
    "GENERIC",
    "POSTGRES",
    "get_dialect",
]
