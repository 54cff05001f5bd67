"""Logging configuration for Tally.

Everything lands in one dated log file plus the console: the ``tally``
application logger, the Flask app logger (handler tracebacks) and
werkzeug's per-request access log all share the same handlers.
"""

import logging
from datetime import date
from typing import List

from flask.logging import default_handler

from config import Config

LOGGER_NAME = "tally"
REQUEST_LOGGER_NAME = "werkzeug"


def _build_handlers(config: Config) -> List[logging.Handler]:
    """Create the file handler (tally-{date}.log) and console handler."""
    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(
        config.log_dir / f"tally-{date.today().isoformat()}.log"
    )
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))

    handlers = [file_handler, console_handler]
    for handler in handlers:
        handler.setLevel(config.log_level)
    return handlers


def _route(logger: logging.Logger, handlers: List[logging.Handler], level) -> None:
    # Replaces handlers so repeated setup never duplicates output
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def setup_logging(config: Config) -> logging.Logger:
    """Set up application and request logging.

    Args:
        config: Application configuration containing log settings.

    Returns:
        The configured tally logger.
    """
    handlers = _build_handlers(config)

    logger = logging.getLogger(LOGGER_NAME)
    _route(logger, handlers, config.log_level)
    _route(logging.getLogger(REQUEST_LOGGER_NAME), handlers, config.log_level)

    return logger


def attach_app_logger(app) -> None:
    """Send a Flask app's own log records to the tally handlers.

    Does nothing until setup_logging() has run, leaving Flask's default
    stderr handler in place (tests, embedding).

    Args:
        app: Flask application.
    """
    logger = get_logger()
    if not logger.handlers:
        return

    app.logger.removeHandler(default_handler)
    _route(app.logger, list(logger.handlers), logger.level)


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The tally logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
