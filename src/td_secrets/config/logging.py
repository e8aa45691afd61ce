"""
Centralized logging configuration.

Provides a bootstrap_logging function that any entry point (CLI task, host
integration, test session) can call to configure logging consistently using
Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
DEFAULT_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then in config/.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    for candidate in (Path('logging.ini'), Path('config/logging.ini')):
        if candidate.exists():
            return candidate
    return None


def _resolve_log_level() -> str:
    """Read LOG_LEVEL from the environment, defaulting to INFO."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        return 'INFO'
    return log_level


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging for the application.

    1. Loads logging.ini with logging.config.fileConfig() when one is found
    2. Falls back to basicConfig on stderr otherwise
    3. Applies the LOG_LEVEL environment variable override

    Args:
        name: Optional logger name to report the configuration source on
    """
    level = _resolve_log_level()
    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT, stream=sys.stderr)
    else:
        try:
            logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
        except Exception as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            logging.basicConfig(level=level, format=DEFAULT_FORMAT, stream=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    logging.getLogger('td_secrets').setLevel(level)

    logger = logging.getLogger(name) if name else root_logger
    logger.debug(f"Logging configured from {config_path or 'defaults'} at level {level}")


def set_debug(enabled: bool = True) -> None:
    """Switch the td_secrets logger (and its handlers' floor) to DEBUG."""
    if not enabled:
        return
    logging.getLogger('td_secrets').setLevel(logging.DEBUG)
    for handler in logging.getLogger().handlers:
        handler.setLevel(logging.DEBUG)
