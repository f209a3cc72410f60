"""
Logging configuration for corpus conversion
"""

import logging
import sys
from typing import Optional


def setup_logging(
    level: Optional[str] = None,
    verbose: bool = False,
    format_string: Optional[str] = None
) -> None:
    """
    Set up logging configuration for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        verbose: If True, enable DEBUG level logging
        format_string: Custom format string for log messages

    Raises:
        ValueError: If level does not name a logging level
    """
    if verbose:
        level = "DEBUG"
    elif level is None:
        level = "INFO"

    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Log to stderr, CoNLL-X output may go to stdout
    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )
