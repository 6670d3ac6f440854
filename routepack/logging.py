"""
routepack Logging Utilities

Simple logging setup using Python's standard logging library.
Modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once per command.

Usage:
    from routepack.logging import setup_logging

    setup_logging(level="DEBUG")
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
):
    """
    Configure logging globally for the entire build.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom log format
        date_format: Custom date format

    Usage:
        setup_logging(level="DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
        stream=sys.stdout,
        force=True  # Reset any existing configuration
    )


__all__ = [
    'setup_logging',
    'DEFAULT_FORMAT',
    'DEFAULT_DATE_FORMAT',
]
