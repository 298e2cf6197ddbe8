"""Logging setup for the package documentation extractor.

Provides a centralized logging configuration with console and optional
file handlers. Log level and format are driven by config.yaml. The
default level is WARNING so a plain ``pkgdoc show`` prints only the
documentation; ``-v`` on the command line lowers it.
"""

import logging
import sys
from typing import Optional

DEFAULT_LEVEL = "WARNING"

# Level reached by passing -v once, twice or more.
_VERBOSE_LEVELS = (logging.INFO, logging.DEBUG)


def resolve_level(level: str, verbose: int = 0) -> int:
    """Turn a level name plus a verbosity count into a numeric level.

    Unknown names fall back to WARNING. Verbosity only ever makes the
    level more detailed, never quieter than ``level``.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    if verbose > 0:
        numeric_level = min(numeric_level, _VERBOSE_LEVELS[min(verbose, len(_VERBOSE_LEVELS)) - 1])
    return numeric_level


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None,
    verbose: int = 0,
) -> logging.Logger:
    """Configure the ``pkgdoc`` logger with console and optional file output.

    Clears any existing handlers to prevent duplicate log entries across
    calls. Console output goes to stderr so it never mixes with the
    documentation printed on stdout.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        log_file: Optional file path for log output. If None, logs only
            to the console.
        verbose: Number of ``-v`` flags given on the command line.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger("pkgdoc")
    package_logger.handlers.clear()

    numeric_level = resolve_level(level, verbose)
    package_logger.setLevel(numeric_level)

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.debug("Logging initialized at level %s", logging.getLevelName(numeric_level))
    return package_logger
