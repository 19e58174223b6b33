"""
Centralized logging configuration for PathWatcher.

Every module obtains its logger through ``get_logger(__name__)`` so that the
file and console handlers are set up exactly once, with one format and one
debug switch for the whole process.
"""

import logging
import sys
from typing import Optional

from . import config


class PathWatcherLogger:
    """Centralized logger configuration for PathWatcher."""

    _initialized = False
    _debug_enabled = False

    @classmethod
    def setup(cls, debug: bool = False, force_reinit: bool = False) -> None:
        """
        Set up centralized logging for the entire application.

        Args:
            debug: If True, enable DEBUG level logging
            force_reinit: If True, reinitialize even if already set up
        """
        if cls._initialized and not force_reinit:
            return

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

        cls._debug_enabled = debug
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        cls._add_file_handler(
            root_logger, logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
        )
        cls._add_console_handler(root_logger, logging.Formatter(config.CONSOLE_LOG_FORMAT))

        cls._initialized = True

        logger = logging.getLogger(__name__)
        logger.debug(
            f"PathWatcher logging initialized on {sys.platform} "
            f"(debug={'on' if debug else 'off'}, log file {config.LOG_FILE})"
        )

    @classmethod
    def _add_file_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add file handler for persistent logging."""
        try:
            config.LOG_DIR.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(config.LOG_FILE)
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)  # File always gets debug
            logger.addHandler(file_handler)
        except Exception as e:
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    @classmethod
    def _add_console_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add console handler for interactive feedback."""
        try:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            console_handler.setLevel(logging.DEBUG if cls._debug_enabled else logging.INFO)
            logger.addHandler(console_handler)
        except Exception as e:
            print(f"Warning: Could not set up console logging: {e}", file=sys.stderr)

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        """
        Get a logger instance, ensuring PathWatcher logging is initialized.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Configured logger instance
        """
        if not cls._initialized:
            cls.setup()

        return logging.getLogger(name)


def setup_logging(debug: bool = False, force_reinit: bool = False) -> None:
    """Set up centralized logging. Wrapper for PathWatcherLogger.setup()."""
    PathWatcherLogger.setup(debug=debug, force_reinit=force_reinit)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance. Wrapper for PathWatcherLogger.get_logger()."""
    return PathWatcherLogger.get_logger(name)

