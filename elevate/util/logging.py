"""Logging configuration for the application."""

import logging
import sys

from elevate.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Statement logging is handled by logfire spans
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)

    logging.getLogger("elevate").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
