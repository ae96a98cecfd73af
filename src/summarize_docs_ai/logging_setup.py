"""
Logging configuration for summarize-docs-ai.

Console output goes through rich; an optional rotating file handler uses the
plain format from LoggingConfig.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from summarize_docs_ai.config import LoggingConfig

PACKAGE_LOGGER = "summarize_docs_ai"


def setup_logging(config: LoggingConfig | None = None, console: Console | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once; handlers installed by a previous call are
    replaced rather than duplicated.

    Args:
        config: Logging section of Settings. Defaults are used if None.
        console: Rich console for the console handler (stderr if None).

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(rich_handler)

    if config.file:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(file_handler)

    return logger
