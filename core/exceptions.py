"""Error types raised by tpadmin commands."""

from typing import Optional


class TpAdminError(Exception):
    """Base class for errors reported to the command handler."""


class ParseError(TpAdminError):
    """Malformed lesson input (bad header, content before header).

    Attributes:
        line_number: 1-based line of the offending input, if known.
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class SyncError(TpAdminError):
    """A batch commit against the document store failed."""


class ConfigError(TpAdminError):
    """Malformed numeric input or missing store configuration."""
