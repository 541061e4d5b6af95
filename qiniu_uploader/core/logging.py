"""Logging utilities for qiniu_uploader modules."""

import logging


PACKAGE_LOGGER = "qiniu_uploader"


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    Loggers propagate to the root logger so they work with basicConfig()
    without an explicit setup_logging() call. Until the root logger has
    handlers, the level defaults to WARNING to keep the interactive prompt
    free of debug chatter.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure the package loggers at the given level.

    Installs a stderr handler on the root logger when none exists yet, so
    log records never interleave with the prompt written to stdout.

    Args:
        level: Logging level (default: logging.INFO)
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

    for logger_name in (
        PACKAGE_LOGGER,
        f"{PACKAGE_LOGGER}.client",
        f"{PACKAGE_LOGGER}.path",
        f"{PACKAGE_LOGGER}.upload",
        f"{PACKAGE_LOGGER}.config",
        f"{PACKAGE_LOGGER}.session",
        f"{PACKAGE_LOGGER}.server",
    ):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True
