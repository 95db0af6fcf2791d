"""Console logging utilities.

Colors each record by level so that info, success, warning and error
lines stand apart in the terminal.
"""

import logging
import sys
from typing import Optional, TextIO


SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

RESET = "\033[0m"

# Foreground on black background
LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[34;40m",
    SUCCESS: "\033[32;40m",
    logging.WARNING: "\033[33;40m",
    logging.ERROR: "\033[31;40m",
    logging.CRITICAL: "\033[1;31;40m",
}


class ColorFormatter(logging.Formatter):
    """Formatter that wraps each message in its level's color.

    Colors are skipped when the stream is not a terminal.
    """

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self._use_color:
            return message
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return message
        return f"{color}{message}{RESET}"


def log_success(logger: logging.Logger, message: str, *args) -> None:
    """Log a message at SUCCESS level."""
    logger.log(SUCCESS, message, *args)


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure application logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        stream: Output stream (defaults to stdout).
    """
    stream = stream or sys.stdout
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        ColorFormatter(
            "%(message)s",
            use_color=hasattr(stream, "isatty") and stream.isatty(),
        )
    )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("qdrant_client").setLevel(logging.WARNING)
