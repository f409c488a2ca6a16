"""SQLAlchemy engine construction shared by source and target adapters."""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


def normalize_url(database_url: str) -> str:
    """Pin driver-less URLs to the drivers this package ships with.

    - ``postgres://`` -> ``postgresql+psycopg://``
    - ``postgresql://`` -> ``postgresql+psycopg://``
    - ``oracle://`` -> ``oracle+oracledb://``
    """
    url = database_url
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        url = "postgresql+psycopg://" + url[len("postgresql://"):]
    if url.startswith("oracle://"):
        url = "oracle+oracledb://" + url[len("oracle://"):]
    return url


def create_engine_pooled(database_url: str, **kwargs: Any) -> Engine:
    """Create a SQLAlchemy engine with connection health checks.

    Default settings:

    - ``pool_pre_ping=True``: Validate connections before checkout.
    - ``pool_recycle=300``: Recycle connections every 5 minutes.
    - ``connect_timeout=10`` appended to PostgreSQL URLs.

    Args:
        database_url: SQLAlchemy connection URL.
        **kwargs: Additional keyword arguments forwarded to
            ``create_engine``.

    Returns:
        Configured ``Engine``.
    """
    url = normalize_url(database_url)

    # Append connect_timeout if not already in URL
    if url.startswith("postgresql") and "connect_timeout" not in url:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}connect_timeout=10"

    defaults: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "echo": False,
    }
    # Caller kwargs override defaults
    merged = {**defaults, **kwargs}

    return create_engine(url, **merged)
