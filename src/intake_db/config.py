"""Database configuration — reads connection parameters from environment.

Supports two modes:
1. A single ``DATABASE_URL`` env var (takes precedence).
2. Individual ``PG_HOST``, ``PG_PORT``, ``PG_USER``, ``PG_PASSWORD``,
   ``PG_DATABASE`` env vars (convenient for docker-compose).

The async SQLAlchemy engine always gets an ``asyncpg`` URL.
"""

import os
import re


def _build_url_from_parts() -> str:
    """Construct a PostgreSQL connection string from individual env vars."""
    host = os.getenv("PG_HOST", "localhost")
    port = os.getenv("PG_PORT", "5432")
    user = os.getenv("PG_USER", "intake")
    password = os.getenv("PG_PASSWORD", "intake")
    database = os.getenv("PG_DATABASE", "intake")
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


def get_async_url() -> str:
    """Return an asyncpg connection URL for the async SQLAlchemy engine."""
    url = os.getenv("DATABASE_URL") or _build_url_from_parts()
    # Ensure the asyncpg driver prefix is present
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


def masked_url(url: str) -> str:
    """Return ``url`` with the password replaced by ``***`` for logging."""
    return re.sub(r"(://[^:/@]+:)[^@]*@", r"\1***@", url)
