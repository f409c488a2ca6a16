"""Source/target client factory.

Turns the profiles named by a ``MirrorConfig`` into SQLAlchemy-backed
clients.  Clients are returned unopened; callers enter them with ``with``
so connections are closed at the end of the run.

Usage:
    from db_mirror.config import load_mirror_config
    from db_mirror.factory import create_source, create_target

    config = load_mirror_config()
    with create_source(config) as source, create_target(config) as target:
        ...
"""

from urllib.parse import quote

from db_mirror.adapters.dialects import TargetDialect, get_dialect
from db_mirror.adapters.source import SourceDatabase
from db_mirror.adapters.target import TargetDatabase
from db_mirror.config.models import DatabaseProfile, MirrorConfig


class ProfileNotFoundError(KeyError):
    """Raised when a requested profile is not configured."""

    pass


def resolve_url(profile: DatabaseProfile) -> str:
    """Resolve profile URL with password substitution.

    Args:
        profile: Database profile from config

    Returns:
        Connection URL with password substituted
    """
    url = profile.url
    if profile.db_password and "[YOUR-PASSWORD]" in url:
        url = url.replace("[YOUR-PASSWORD]", quote(profile.db_password, safe=""))
    return url


def get_profile(config: MirrorConfig, profile_name: str) -> DatabaseProfile:
    """Look up a profile by name.

    Raises:
        ProfileNotFoundError: If the profile is not in the config.
    """
    if profile_name not in config.profiles:
        available = ", ".join(config.profiles.keys())
        raise ProfileNotFoundError(
            f"Profile '{profile_name}' not found. Available: {available}"
        )
    return config.profiles[profile_name]


def create_source(config: MirrorConfig, profile_name: str | None = None) -> SourceDatabase:
    """Source client for ``profile_name`` (default: the configured source)."""
    profile = get_profile(config, profile_name or config.source)
    return SourceDatabase(resolve_url(profile))


def create_target(config: MirrorConfig) -> TargetDatabase:
    """Target client for the configured target profile."""
    return TargetDatabase(resolve_url(config.target_profile))


def target_dialect(profile: DatabaseProfile, dialect_name: str) -> TargetDialect:
    """Dialect from the profile's provider, or the live dialect for ``"auto"``."""
    if profile.provider == "auto":
        return get_dialect(dialect_name)
    return get_dialect(profile.provider)
