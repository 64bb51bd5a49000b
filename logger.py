"""Logging configuration for appointme.

Sets up logging to both file (with date-based naming) and console. Modules get
child loggers of the "appointme" logger through get_logger(__name__), so a
single setup_logging() call configures all of them.
"""

import logging
from datetime import date
from typing import Optional
from config import Config

ROOT_LOGGER_NAME = "appointme"


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured root application logger.
    """
    # Create log directory if it doesn't exist
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    logger.addHandler(_file_handler(config))
    logger.addHandler(_console_handler(config))

    return logger


def _file_handler(config: Config) -> logging.Handler:
    """Handler writing to appointme-{date}.log in the log directory."""
    log_file_path = config.log_dir / f"appointme-{date.today().isoformat()}.log"
    handler = logging.FileHandler(log_file_path)
    handler.setLevel(config.log_level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _console_handler(config: Config) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(config.log_level)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the application logger, or one of its children.

    Args:
        name: Module name (usually __name__). None returns the root
              application logger.

    Returns:
        Logger under the "appointme" hierarchy.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
