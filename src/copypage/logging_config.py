import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "copypage"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty libraries used while loading pages
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def _handler(handler: logging.Handler, level: int, format_string: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``copypage`` logger.

    Log records go to stderr by default so Markdown printed on stdout can
    be piped. Unless ``level`` is DEBUG, HTTP library loggers are held at
    WARNING.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, replace handlers installed by an earlier call
        stream: Stream for the console handler (default: sys.stderr)

    Returns:
        Configured logger instance
    """
    format_string = format_string or DEFAULT_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for old in logger.handlers:
            old.close()
        logger.handlers.clear()
        logger.addHandler(_handler(logging.StreamHandler(stream or sys.stderr), numeric_level, format_string))
        if log_file:
            logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), numeric_level, format_string))

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    # Records are handled here only, not again by the root logger
    logger.propagate = False

    return logger
