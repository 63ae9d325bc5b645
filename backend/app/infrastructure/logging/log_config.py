"""Per-category log levels for the dashboard backend.

Call ``setup_logging()`` once from the lifespan. Each ``log_level_*``
setting owns a group of logger names, so SQL echo or outbound HTTP can be
silenced while the mutation pipeline stays verbose.
"""

import logging
import sys

from app.config import Settings, get_settings

LOG_FORMAT = "%(levelname)-8s %(name)s — %(message)s"

CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_pipeline": (
        "app.application.services.mutation_pipeline",
        "app.application.services.confirmation_gate",
    ),
    # Local slots, the remote RPC client and the SQL adapters.
    "log_level_storage": (
        "app.infrastructure.local_store",
        "app.infrastructure.storage",
        "app.infrastructure.remote",
        "app.infrastructure.database",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels and return them keyed by category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handlers; scripts and tests may not have any.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field, logger_names in CATEGORY_LOGGERS.items():
        level = _parse_level(getattr(settings, field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
        applied[field.removeprefix("log_level_")] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        ", ".join(f"{name}={logging.getLevelName(level)}" for name, level in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
