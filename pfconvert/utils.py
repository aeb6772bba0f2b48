"""
Utility functions for the converter.

This module contains helpers that are used by the command line driver but
are not directly related to parsing or rendering statements.
"""

import os
import logging

logger = logging.getLogger(__name__)


def setup_logging(debug=False, log_level=None):
    """Configure logging for the application.

    Args:
        debug (bool): Force DEBUG level
        log_level (str, optional): Level name; defaults to the LOG_LEVEL
            environment variable, then 'warning'

    Returns:
        str or None: Path of the log file when LOG_FILE is set

    Notes:
        - Console logging goes to stderr, stdout carries the converted output
        - A file handler is only added when LOG_FILE is set
        - Calling it again replaces and closes the handlers it installed before
    """
    if debug:
        level = logging.DEBUG
    else:
        level_name = log_level or os.getenv('LOG_LEVEL', 'warning')
        level = getattr(logging, level_name.upper(), logging.WARNING)

    format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler()]

    log_file = os.getenv('LOG_FILE')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=format,
        handlers=handlers,
        force=True
    )

    return log_file
