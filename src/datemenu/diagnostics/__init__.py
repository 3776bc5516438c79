"""Diagnostic system for datemenu errors.

Provides structured error diagnostics with codes, hints, and help URLs.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    DateMenuError,
    DiscoveryError,
    FormatterNotFoundError,
    FormattingError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "DateMenuError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DiscoveryError",
    "ErrorTemplate",
    "FormatterNotFoundError",
    "FormattingError",
    "OutputFormat",
]
