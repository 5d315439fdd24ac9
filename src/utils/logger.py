"""Logging setup for the showcase scraper."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler_for(logger: logging.Logger, log_path: Path) -> Optional[RotatingFileHandler]:
    target = str(log_path.resolve())
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == target:
            return handler
    return None


def setup_logger(
    name: str = "showcase_scraper",
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the shared logger with a console and optional rotating file handler.

    Both ``cli.main`` and ``main.main`` call this, so repeat calls reuse the
    existing handlers: levels are updated, and a file handler is added only
    if none already writes to ``log_file``.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        if _file_handler_for(logger, log_path) is None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            rotating = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count)
            rotating.setFormatter(formatter)
            logger.addHandler(rotating)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
