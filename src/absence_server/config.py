"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

from absence_questions.constants import DEFAULT_SCENARIO_ROOTS, DEFAULT_TRIGGER_MATCH


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Catalog directory (None → QuestionCatalog default, v1/ from repo root)
    catalog_dir: str | None = None

    # "contains" (loose, historical behaviour) or "exact"
    trigger_match: str = "contains"

    # "initial" (scenario rules filter Initial roots only) or "all"
    scenario_roots: str = "initial"

    # Logging
    log_level: str = "INFO"


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        catalog_dir=os.getenv("SERVER_CATALOG_DIR") or None,
        trigger_match=DEFAULT_TRIGGER_MATCH,
        scenario_roots=DEFAULT_SCENARIO_ROOTS,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
    )
