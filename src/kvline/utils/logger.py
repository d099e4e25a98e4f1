"""Minimal logging utilities for kvline.

Provides a simple get_logger function that wraps the standard library logging.

Scanner and Reducer accept any ``logging.Logger`` as their diagnostics sink.
When none is given they use the namespaced logger from get_logger, which
stays silent at DEBUG unless the application configures logging.

Example:
    >>> from kvline.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("scanning")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "kvline." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'kvline.mymodule'
    """
    if not (name == "kvline" or name.startswith("kvline.")):
        name = f"kvline.{name}"
    return logging.getLogger(name)
