"""The error raised for invalid scenes and the report printed for it."""

from __future__ import annotations

_RED_BOLD = "\x1b[1;31m"
_BLUE = "\x1b[34m"
_BLACK = "\x1b[30m"
_RESET = "\x1b[0m"
_WHITE_BOLD = "\x1b[1;37m"


class CubError(Exception):
    """A fatal problem with the scene file or its resources.

    ``line`` is the offending input line, if any, and ``line_number`` its
    one-based position in the file.
    """

    def __init__(self, message: str, line: str | None = None, line_number: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line:{self.line_number} | `{self.line.strip(chr(10))}`"


def format_error(message: str, line: str | None = None, line_number: int = 0) -> str:
    """Build the coloured error report written to standard error."""
    report = f"{_RED_BOLD}Error{_BLUE}\n{message}"
    if line is None:
        return report + "\n"
    return (
        f"{report} at {_BLACK}line:{line_number} {_RESET}| "
        f"{_WHITE_BOLD}`{line.strip(chr(10))}`{_RESET}\n"
    )