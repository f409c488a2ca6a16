"""Configuration loading from db-mirror.toml."""

import os
import tomllib
from pathlib import Path

from db_mirror.config.models import DatabaseProfile, MirrorConfig

CONFIG_FILENAME = "db-mirror.toml"


def load_mirror_config(
    config_path: Path | None = None,
    env_prefix: str = "",
) -> MirrorConfig:
    """Load mirror configuration from a TOML file.

    Resolution order for the file:
    1. ``config_path`` argument
    2. ``{env_prefix}DB_MIRROR_CONFIG`` env var
    3. ``db-mirror.toml`` in the current working directory

    The principal password may be left out of the file and supplied via
    ``{env_prefix}DB_MIRROR_PRINCIPAL_PASSWORD`` instead.

    Args:
        config_path: Path to the TOML file.
        env_prefix: Prefix for environment variable lookup.

    Returns:
        MirrorConfig with all profiles and mirror settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config format is invalid
    """
    if config_path is None:
        env_path = os.environ.get(f"{env_prefix}DB_MIRROR_CONFIG")
        config_path = Path(env_path) if env_path else Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        raise FileNotFoundError(
            f"Mirror config not found: {config_path}\n"
            f"Copy db-mirror.toml.example to {CONFIG_FILENAME} and configure your profiles."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse profiles
    profiles = {}
    for name, profile_data in data.get("profiles", {}).items():
        profiles[name] = DatabaseProfile(**profile_data)

    # Parse mirror settings
    mirror_settings = dict(data.get("mirror", {}))
    if "principal_password" not in mirror_settings:
        env_password = os.environ.get(f"{env_prefix}DB_MIRROR_PRINCIPAL_PASSWORD")
        if env_password is not None:
            mirror_settings["principal_password"] = env_password

    return MirrorConfig(profiles=profiles, **mirror_settings)
