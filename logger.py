"""Logging setup for the trainer."""

import logging
import sys

from config import config

_logging_initialized = False

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(short_name)s] %(message)s"


class ContextFilter(logging.Filter):
    """Adds the last component of the logger name as ``short_name``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.short_name = record.name.rsplit(".", 1)[-1] if record.name else "root"
        return True


def setup_logging(level: str | None = None) -> None:
    """
    Configure console logging once per process.

    Args:
        level: Level name; defaults to ``LOG_LEVEL`` from config
    """
    global _logging_initialized

    if _logging_initialized:
        return
    _logging_initialized = True

    level_name = (level or config.logging.level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    console_handler.addFilter(ContextFilter())
    root_logger.addHandler(console_handler)

    # Quiet noisy libraries
    logging.getLogger("transitions").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.info("Logging configured: level=%s", level_name)