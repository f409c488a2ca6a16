"""Configuration management: profiles, TOML loading, and config models.

Usage:
    >>> from db_mirror.config import load_mirror_config, DatabaseProfile, MirrorConfig
"""

from db_mirror.config.loader import load_mirror_config
from db_mirror.config.models import DatabaseProfile, MirrorConfig

__all__ = ["load_mirror_config", "DatabaseProfile", "MirrorConfig"]
