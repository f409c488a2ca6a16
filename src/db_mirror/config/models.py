"""Pydantic models for mirror configuration."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Oracle-maintained accounts that never hold user data
DEFAULT_EXCLUDED_SCHEMAS: frozenset[str] = frozenset(
    {
        "ANONYMOUS",
        "APEX_PUBLIC_USER",
        "APPQOSSYS",
        "AUDSYS",
        "CTXSYS",
        "DBSFWUSER",
        "DBSNMP",
        "DIP",
        "DVF",
        "DVSYS",
        "FLOWS_FILES",
        "GGSYS",
        "GSMADMIN_INTERNAL",
        "GSMCATUSER",
        "GSMROOTUSER",
        "GSMUSER",
        "LBACSYS",
        "MDDATA",
        "MDSYS",
        "OJVMSYS",
        "OLAPSYS",
        "ORACLE_OCM",
        "ORDDATA",
        "ORDPLUGINS",
        "ORDSYS",
        "OUTLN",
        "REMOTE_SCHEDULER_AGENT",
        "SI_INFORMTN_SCHEMA",
        "SYS",
        "SYS$UMF",
        "SYSBACKUP",
        "SYSDG",
        "SYSKM",
        "SYSRAC",
        "SYSTEM",
        "WMSYS",
        "XDB",
        "XS$NULL",
    }
)


class DatabaseProfile(BaseModel):
    """Database connection profile from db-mirror.toml."""

    url: str
    description: str = ""
    db_password: str | None = None  # For [YOUR-PASSWORD] placeholder substitution
    provider: str = "auto"  # Target dialect; "auto" uses the SQLAlchemy dialect name


class MirrorConfig(BaseModel):
    """Complete mirror configuration, loaded once at process start.

    Example:
        >>> config = MirrorConfig(
        ...     profiles={
        ...         "src": DatabaseProfile(url="oracle://scott@db/ORCL"),
        ...         "dst": DatabaseProfile(url="postgresql://localhost/mirror"),
        ...     },
        ...     source="src",
        ...     target="dst",
        ...     principal_password="changeit",
        ... )
        >>> config.batch_size
        5000
    """

    model_config = ConfigDict(frozen=True)

    profiles: dict[str, DatabaseProfile]
    source: str
    target: str
    excluded_schemas: frozenset[str] = DEFAULT_EXCLUDED_SCHEMAS
    batch_size: int = Field(default=5000, gt=0)
    principal_password: str
    read_metadata_first: bool = False

    @model_validator(mode="after")
    def _check_profiles(self) -> "MirrorConfig":
        available = ", ".join(self.profiles.keys()) or "(none)"
        for role, name in (("source", self.source), ("target", self.target)):
            if name not in self.profiles:
                raise ValueError(
                    f"{role} profile '{name}' not found. Available: {available}"
                )
        if self.source == self.target:
            raise ValueError("source and target must be different profiles")
        return self

    @property
    def source_profile(self) -> DatabaseProfile:
        return self.profiles[self.source]

    @property
    def target_profile(self) -> DatabaseProfile:
        return self.profiles[self.target]
