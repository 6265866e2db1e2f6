"""Logging setup for langcat."""

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a config value like ``"debug"`` or ``10`` into a logging level."""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Union[int, str, None] = logging.INFO, format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure the root ``langcat`` logger.
    
    Args:
        level: Logging level, numeric or by name (default: INFO)
        format_string: Custom format string (optional)
    
    Returns:
        The ``langcat`` logger
    """
    logging.basicConfig(
        level=resolve_level(level),
        format=format_string or DEFAULT_FORMAT,
        stream=sys.stderr,
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    
    logger = logging.getLogger("langcat")
    logger.setLevel(resolve_level(level))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a langcat module, e.g. ``get_logger("store.cache")``."""
    return logging.getLogger(f"langcat.{name}")
