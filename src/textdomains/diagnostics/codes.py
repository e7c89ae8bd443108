"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
textdomains exception.

Python 3.13+.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Source file errors (missing, unreadable, malformed)
        2000-2999: Chain errors (cycles, depth limits)
        3000-3999: Resolution outcomes
    """

    # Source file errors (1000-1999)
    FILE_NOT_FOUND = 1001
    FILE_UNREADABLE = 1002
    PARSE_FAILED = 1003
    UNSUPPORTED_FORMAT = 1004
    INVALID_DIRECTIVE = 1005

    # Chain errors (2000-2999)
    CIRCULAR_EXTENSION = 2001
    CIRCULAR_FALLBACK = 2002
    CIRCULAR_ALIAS = 2003
    MAX_DEPTH_EXCEEDED = 2004

    # Resolution outcomes (3000-3999)
    NO_TRANSLATION_FOUND = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Provides rich error information for both humans (log lines, tracebacks)
    and tools (JSON output for deployment checks).

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        path: Source file involved (None when no single file is at fault)
        line: 1-indexed line number inside ``path``
        chain: Ordered identities leading to the error (files, locales, aliases)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    path: str | None = None
    line: int | None = None
    chain: tuple[str, ...] | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[CIRCULAR_EXTENSION]: Circular extension: a.ini -> b.ini -> a.ini
              --> /srv/languages/a.ini
              = chain: /srv/languages/a.ini
                       -> /srv/languages/b.ini
                       -> /srv/languages/a.ini
              = help: Remove one of the @parent_ini / @extends directives

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
