"""
Logging configuration for parcel.
Uses loguru for enhanced logging capabilities.
"""

import sys
from pathlib import Path
from loguru import logger

from parcel.config import ParcelConfig


def setup_logging(config: ParcelConfig, console: bool = True) -> None:
    """
    Configure logging for parcel.

    Standard output carries the tracking result, so console logging
    always goes to stderr.

    Args:
        config: parcel configuration
        console: Whether to log to stderr
    """

    # Remove default handler
    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    simple_format = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

    if console:
        logger.add(
            sys.stderr,
            format=log_format,
            level=config.log_level,
            colorize=True,
        )

    # File output
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_path),
            format=simple_format,
            level=config.log_level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

    logger.debug(f"Logging initialized - Level: {config.log_level}, File: {config.log_file or 'none'}")
