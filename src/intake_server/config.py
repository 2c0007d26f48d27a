"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

# --- Pagination defaults ---
# Module-level constants read at import time so FastAPI Query() defaults
# can reference them (Query defaults must be static at decoration time).
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 5000

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Pathway data directory (None → packaged intake_pathways/data)
    pathway_dir: str | None = None

    # Logging
    log_level: str = "INFO"

    # OpenAI: without a key, the summary/diagnosis endpoints return 503
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"

    # Create missing tables at startup
    create_tables: bool = True


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` / ``OPENAI_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "5000")),
        cors_origins=origins,
        pathway_dir=os.getenv("SERVER_PATHWAY_DIR") or None,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        create_tables=os.getenv("SERVER_CREATE_TABLES", "1").lower() not in ("0", "false", "no"),
    )
