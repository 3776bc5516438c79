"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
datemenu exception.

Python 3.13+. Zero external dependencies.
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
        1000-1999: Configuration errors (locale, timezone, calendar)
        2000-2999: Rendering errors (pattern formatting failures)
        3000-3999: Registry errors (variant lookup and discovery)
    """

    # Configuration errors (1000-1999)
    LOCALE_UNKNOWN = 1001
    TIMEZONE_UNKNOWN = 1002
    CALENDAR_UNSUPPORTED = 1003
    SETTING_INVALID = 1004

    # Rendering errors (2000-2999)
    FORMATTING_FAILED = 2001
    NO_RENDERER = 2002
    PATTERN_INVALID = 2003

    # Registry errors (3000-3999)
    FORMATTER_NOT_FOUND = 3001
    DISCOVERY_FAILED = 3002
    FORMATTER_DUPLICATE = 3003
    REGISTRY_NOT_LOADED = 3004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        pattern: Pattern string being rendered (rendering errors)
        locale_code: Locale in effect when the error occurred
        timezone: Time zone in effect when the error occurred
        formatter_key: Registry key of the formatter variant involved
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    help_url: str | None = None
    pattern: str | None = None
    locale_code: str | None = None
    timezone: str | None = None
    formatter_key: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[TIMEZONE_UNKNOWN]: Unknown time zone 'Mars/Olympus'
              = timezone: Mars/Olympus
              = help: Use an IANA zone name such as 'Europe/Berlin'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
