"""Identifier validation and placeholder binding for dynamic SQL.

Identifiers (schema, table, column names) cannot be bound as parameters,
so they are checked against an allow-list pattern before being
interpolated.  Values are always bound through named placeholders.

Usage:
    from db_mirror.schema.identifiers import bind_not_in, qualified

    clause, params = bind_not_in("USERNAME", ["SYS", "SYSTEM"], prefix="x")
    # clause == "USERNAME NOT IN (:x0, :x1)"
    # params == {"x0": "SYS", "x1": "SYSTEM"}
"""

import re
from collections.abc import Iterable
from typing import Any

from db_mirror.errors import InvalidIdentifierError
from db_mirror.schema.models import TableRef

# Unquoted identifier characters accepted by Oracle, H2 and PostgreSQL
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$#]*$")


def validate_identifier(name: str) -> str:
    """Return ``name`` unchanged if it matches the allow-list.

    Raises:
        InvalidIdentifierError: If the name contains characters outside
            ``[A-Za-z0-9_$#]`` or starts with a digit.
    """
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.fullmatch(name):
        raise InvalidIdentifierError(f"Invalid SQL identifier: {name!r}")
    return name


def qualified(table: TableRef) -> str:
    """Validated ``SCHEMA.TABLE`` for interpolation into SQL."""
    return f"{validate_identifier(table.schema_name)}.{validate_identifier(table.name)}"


def bind_placeholders(
    values: Iterable[Any], prefix: str = "p"
) -> tuple[str, dict[str, Any]]:
    """Bind an ordered sequence of values to named placeholders.

    Returns:
        Tuple of the comma-separated placeholder list and the parameter
        dict, e.g. ``(":p0, :p1", {"p0": "a", "p1": "b"})``.
    """
    params: dict[str, Any] = {}
    names: list[str] = []
    for i, value in enumerate(values):
        param_name = f"{prefix}{i}"
        names.append(f":{param_name}")
        params[param_name] = value
    return ", ".join(names), params


def bind_not_in(
    column: str, values: Iterable[Any], prefix: str = "x"
) -> tuple[str, dict[str, Any]]:
    """Build ``column NOT IN (...)`` with bound values.

    An empty value list yields an empty clause (``NOT IN ()`` is not valid
    SQL), so callers must only prepend ``AND`` when the clause is non-empty.
    """
    placeholders, params = bind_placeholders(sorted(values), prefix)
    if not params:
        return "", {}
    return f"{validate_identifier(column)} NOT IN ({placeholders})", params
