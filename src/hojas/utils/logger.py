"""Logging helpers for hojas.

Wraps the standard library logging so every module logs under the
``hojas.`` namespace. The library never installs handlers; hosts decide
where records go.

Example:
    >>> from hojas.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("parsed %d blocks", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``hojas``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("assembler").name
        'hojas.assembler'
    """
    if not (name == "hojas" or name.startswith("hojas.")):
        name = f"hojas.{name}"
    return logging.getLogger(name)
