# backend/app/core/logging.py
"""
Logging setup.

Application modules log through logging.getLogger(__name__). Requests are
logged on the "access" logger, one line each, to stdout and optionally to
ACCESS_LOG_FILE.
"""
import logging
import sys
from typing import Optional

from backend.app.core.config import Settings

ACCESS_LOGGER_NAME = "access"

_ACCESS_FORMAT = "%(asctime)s %(message)s"


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        level=level,
    )

    # SQL statements are echoed through DATABASE_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)

    _configure_access_logger(settings.ACCESS_LOG_FILE)


def _configure_access_logger(log_file: Optional[str]) -> None:
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False

    # configure_logging may run more than once (tests, reloads)
    for handler in list(access_logger.handlers):
        access_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_ACCESS_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    access_logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        access_logger.addHandler(file_handler)


def get_access_logger() -> logging.Logger:
    return logging.getLogger(ACCESS_LOGGER_NAME)
