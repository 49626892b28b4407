"""
Logging Setup
Routes all log output to stderr (and optionally a rotating file)
"""

import sys
from loguru import logger


def configure_logging(level: str = "INFO", log_file: str = ""):
    """
    Configure loguru sinks

    stdout is left untouched; it only ever carries the deployment result.

    Args:
        level: Minimum level for the stderr sink
        log_file: Optional path for a rotating debug log ('' disables it)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )
