"""Logging setup for the waverover server.

Configures the ``waverover`` logger hierarchy from the ``logging`` section
of the settings and aligns uvicorn's loggers with the same level.
"""

from __future__ import annotations

import logging
import sys

from waverover.config.settings import LoggingConfig

_HANDLER_MARK = "_waverover_handler"

# uvicorn installs its own handlers; only the level is aligned.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure logging for the waverover application.

    Installs a stderr handler and, when ``config.file`` is set, a file
    handler on the ``waverover`` logger. Calling this again replaces the
    handlers installed by a previous call instead of stacking them.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).

    Returns:
        The configured ``waverover`` logger.
    """
    if config is None:
        config = LoggingConfig()

    level = getattr(logging, config.level.upper(), logging.INFO)
    app_logger = logging.getLogger("waverover")
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            app_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARK, True)
        app_logger.addHandler(handler)

    for name in UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(level)

    app_logger.info("Logging initialized at %s level", config.level)
    return app_logger
