"""
Centralized logging configuration for IP Updater.

The agent runs headless under launchd, so by default it only writes to the log
file. Interactive commands ask for a console handler as well.
"""

import logging
import sys
from typing import Optional

from . import config


class IPUpdaterLogger:
    """Centralized logger configuration for IP Updater."""

    _initialized = False
    _debug_enabled = False

    @classmethod
    def setup(
        cls, debug: bool = False, console: bool = False, force_reinit: bool = False
    ) -> None:
        """
        Set up centralized logging for the entire application.

        Args:
            debug: If True, enable DEBUG level logging
            console: If True, also log to stderr
            force_reinit: If True, reinitialize even if already set up
        """
        if cls._initialized and not force_reinit:
            return

        # Clear any existing handlers to avoid duplication
        root_logger = logging.getLogger()
        if root_logger.hasHandlers():
            root_logger.handlers.clear()

        cls._debug_enabled = debug
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

        cls._add_file_handler(root_logger, formatter)
        if console:
            cls._add_console_handler(root_logger, formatter)

        cls._initialized = True

        logger = logging.getLogger(__name__)
        logger.debug(
            f"IP Updater logging initialized (debug={'on' if debug else 'off'}, "
            f"console={'on' if console else 'off'})"
        )

    @classmethod
    def _add_file_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add file handler for persistent logging."""
        try:
            config.LOG_DIR.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(config.LOG_FILE)
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    @classmethod
    def _add_console_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add console handler for interactive feedback."""
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.DEBUG if cls._debug_enabled else logging.INFO)
        logger.addHandler(console_handler)

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        """
        Get a logger instance.

        Handlers are attached by setup(); until then records propagate to
        whatever the root logger has, which keeps imports side-effect free.
        """
        return logging.getLogger(name)


# Convenience functions for easy import
def setup_logging(debug: bool = False, console: bool = False, force_reinit: bool = False) -> None:
    """Set up centralized logging. Wrapper for IPUpdaterLogger.setup()."""
    IPUpdaterLogger.setup(debug=debug, console=console, force_reinit=force_reinit)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance. Wrapper for IPUpdaterLogger.get_logger()."""
    return IPUpdaterLogger.get_logger(name)
