"""
Structured logging setup for all modules.

Every logger returned by get_logger() is a child of one "music_mint" logger
that owns the handlers, so the JSON stdout and rotating file outputs are set
up once per process. The mint being worked on is carried in a context
variable and added to every record.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional

from shared.config import settings

ROOT_LOGGER_NAME = "music_mint"
LOG_FILE_NAME = "app.log"
LOG_FILE_MAX_BYTES = 100 * 1024 * 1024  # 100MB
LOG_FILE_BACKUPS = 5

mint_id_context: ContextVar[Optional[str]] = ContextVar("mint_id", default=None)

# LogRecord attributes; anything else on a record came from `extra`
STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "getMessage", "taskName"
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        mint_id = mint_id_context.get()
        if mint_id:
            log_data["mint_id"] = mint_id

        for key, value in record.__dict__.items():
            if key in STANDARD_ATTRS or key.startswith("_"):
                continue
            # Explicit mint_id=None keeps the context value
            if key == "mint_id" and value is None:
                continue
            if isinstance(value, (str, int, float, bool, type(None))):
                log_data[key] = value
            else:
                log_data[key] = str(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Empty log_dir means stdout only
    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (e.g., "composer.encoder")

    Returns:
        Logger named "music_mint.<name>"
    """
    root = _configure_root_logger()
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = name[len(ROOT_LOGGER_NAME) + 1:]
    return root.getChild(name)


def set_mint_id(mint_id: Optional[str]) -> None:
    """Set the mint_id added to log records of the current request."""
    mint_id_context.set(mint_id)


@contextmanager
def mint_context(mint_id: str) -> Iterator[None]:
    """
    Tag log records with mint_id for the duration of the block.

    The previous value is restored on exit.
    """
    token = mint_id_context.set(mint_id)
    try:
        yield
    finally:
        mint_id_context.reset(token)
