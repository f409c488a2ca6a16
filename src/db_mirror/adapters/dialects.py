"""Target dialect DDL templates.

The type mapper emits generic (H2-style) declarations such as ``CLOB``
and ``VARCHAR(MAX)``.  A ``TargetDialect`` rewrites the names a target
does not understand and renders the provisioning statements in the
target's syntax.

Usage:
    from db_mirror.adapters.dialects import get_dialect

    dialect = get_dialect("postgresql")
    dialect.column_type("CLOB")
    # 'TEXT'
    dialect.create_user_sql("SALES", "changeit")
    # "CREATE ROLE SALES LOGIN PASSWORD 'changeit'"
"""

from dataclasses import dataclass, field


def quote_literal(value: str) -> str:
    """SQL string literal for statements run through ``sqlalchemy.text()``.

    Single quotes are doubled.  Colons are escaped as ``\\:`` because
    ``text()`` parses ``:name`` as a bind parameter even inside quotes;
    it renders ``\\:`` back to a plain ``:``.
    """
    escaped = value.replace("'", "''").replace(":", r"\:")
    return f"'{escaped}'"


@dataclass(frozen=True)
class TargetDialect:
    """DDL rendering rules for one target database family.

    Attributes:
        name: Dialect family name.
        type_overrides: Generic type declaration -> target declaration.
        create_user_template: ``str.format`` template with ``{name}`` and
            ``{password}`` (already quoted) fields.
    """

    name: str
    type_overrides: dict[str, str] = field(default_factory=dict)
    create_user_template: str = "CREATE USER IF NOT EXISTS {name} PASSWORD {password}"

    def column_type(self, declaration: str) -> str:
        return self.type_overrides.get(declaration, declaration)

    def create_schema_sql(self, schema: str) -> str:
        return f"CREATE SCHEMA IF NOT EXISTS {schema}"

    def create_user_sql(self, schema: str, password: str) -> str:
        return self.create_user_template.format(
            name=schema, password=quote_literal(password)
        )

    def grant_sql(self, schema: str) -> str:
        return f"GRANT ALL ON SCHEMA {schema} TO {schema}"

    def drop_table_sql(self, qualified_name: str) -> str:
        return f"DROP TABLE IF EXISTS {qualified_name}"


GENERIC = TargetDialect(name="generic")

POSTGRES = TargetDialect(
    name="postgresql",
    type_overrides={
        "VARCHAR(MAX)": "TEXT",
        "CLOB": "TEXT",
        "BLOB": "BYTEA",
        "TINYINT": "SMALLINT",
        "DOUBLE": "DOUBLE PRECISION",
        "FLOAT": "DOUBLE PRECISION",
    },
    # PostgreSQL has no CREATE USER IF NOT EXISTS; an existing role makes
    # this fail, which provisioning already treats as non-fatal.
    create_user_template="CREATE ROLE {name} LOGIN PASSWORD {password}",
)

_DIALECTS = {
    "generic": GENERIC,
    "h2": GENERIC,
    "postgres": POSTGRES,
    "postgresql": POSTGRES,
}


def get_dialect(name: str | None) -> TargetDialect:
    """Look up a dialect by provider or SQLAlchemy dialect name.

    Unknown names fall back to the generic dialect.
    """
    return _DIALECTS.get((name or "generic").lower(), GENERIC)
