"""Logging setup for the API process and the cron-triggered publication pass.

Each log category has its own level in Settings (``LOG_LEVEL_SQL``,
``LOG_LEVEL_CMS``, ...), so the WordPress client can be traced at DEBUG
while SQLAlchemy stays quiet.

Usage:
    from blogpress.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import re
import sys

from blogpress.config import get_settings

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")

# Settings field → logger names it controls
_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("log_level_sql", ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite")),
    ("log_level_http", ("httpx", "httpcore")),
    ("log_level_uvicorn", ("uvicorn", "uvicorn.access", "uvicorn.error")),
    (
        "log_level_publication",
        ("PublicationService", "ScheduledPublicationRunner", "blogpress.application.services"),
    ),
    ("log_level_cms", ("blogpress.infrastructure.cms",)),
)


class _PlainFormatter(logging.Formatter):
    """Drops the StageLogger colour codes when output is not a terminal."""

    def format(self, record: logging.LogRecord) -> str:
        return _ANSI_ESCAPE.sub("", super().format(record))


def setup_logging() -> None:
    """Apply the root level, a fallback stderr handler and per-category levels."""
    settings = get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        root.addHandler(_stderr_handler())

    applied: dict[str, str] = {}
    for field_name, logger_names in _CATEGORIES:
        raw = getattr(settings, field_name)
        level = _parse_level(raw)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
        applied[field_name.removeprefix("log_level_")] = logging.getLevelName(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level.upper(),
        " ".join(f"{k}={v}" for k, v in applied.items()),
    )


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    if sys.stderr.isatty():
        handler.setFormatter(logging.Formatter(fmt))
    else:
        handler.setFormatter(_PlainFormatter(fmt))
    return handler


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
