"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(SQLAlchemy statements, the Sentry transport) can be silenced without
affecting the application's own loggers.

Usage:
    from articles_api.logging_config import setup_logging
    setup_logging()   # Call once at startup (in the lifespan)
"""
import logging
import sys

from articles_api.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "articles_api"

# Settings field -> logger names it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "LOG_LEVEL_SQL": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "LOG_LEVEL_HTTP": [
        "sentry_sdk.errors",
        "urllib3",
    ],
}


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """Configure the root logger and the per-category levels."""
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.LOG_LEVEL))

    # Idempotent: a second call (e.g. a reloaded app) must not stack handlers.
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)

    for field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
