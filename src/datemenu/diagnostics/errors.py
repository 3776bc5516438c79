"""datemenu exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class DateMenuError(Exception):
    """Base exception for all datemenu errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize DateMenuError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class FormattingError(DateMenuError):
    """Raised when rendering a pattern fails.

    The engine never swallows these; the live display catches them and keeps
    showing its previous text.
    """


class ConfigurationError(FormattingError):
    """Locale, time zone or calendar rejected by the formatter.

    Subclass of FormattingError: an invalid custom time zone surfaces as a
    render failure on the next tick, exactly like a malformed pattern.
    """


class FormatterNotFoundError(DateMenuError, KeyError):
    """Registry key does not name a known formatter variant."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the multi-line diagnostic
        return Exception.__str__(self)


class DiscoveryError(DateMenuError):
    """Formatter registry could not be loaded or was used before loading."""
