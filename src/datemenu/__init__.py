"""datemenu - configurable date/time text for a desktop panel clock.

Renders the current instant through user patterns in one of several
interchangeable formatter variants, with locale data from Babel (CLDR).

Public API:
    FormatterRegistry - Load variants and expose their metadata
    ClassicFormatter - CLDR field-letter patterns ("EEEE, d MMMM HH:mm")
    TokenFormatter - arrow token patterns ("dddd, D MMMM HH:mm")
    BeatsFormatter - Swatch Internet Time ("@bbb.s")
    DatePatternFormatter - Cached classic pattern engine
    FormatterConfiguration - Immutable (timezone, locale, calendar) value
    ClockDisplay - Live label text with failure fallback

Exceptions:
    DateMenuError - Base exception class
    FormattingError - Render failures
    ConfigurationError - Rejected locale, time zone or calendar
    FormatterNotFoundError - Unknown registry key
    DiscoveryError - Registry load failures

Submodules:
    datemenu.pattern - Tokenizer, field resolver and compiler
    datemenu.formatters - Variant contract, built-in variants, registry
    datemenu.display - Settings, update cadence, clock label, help markup
    datemenu.diagnostics - Error types and structured diagnostics
"""

from .diagnostics import (
    ConfigurationError,
    DateMenuError,
    DiscoveryError,
    FormatterNotFoundError,
    FormattingError,
)
from .display import ClockDisplay, DisplaySettings
from .formatters import (
    BaseFormatter,
    BeatsFormatter,
    ClassicFormatter,
    FormatterRegistry,
    TokenFormatter,
)
from .pattern import DatePatternFormatter
from .runtime import FormatterConfiguration

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("datemenu")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BaseFormatter",
    "BeatsFormatter",
    "ClassicFormatter",
    "ClockDisplay",
    "ConfigurationError",
    "DateMenuError",
    "DatePatternFormatter",
    "DiscoveryError",
    "DisplaySettings",
    "FormatterConfiguration",
    "FormatterNotFoundError",
    "FormatterRegistry",
    "FormattingError",
    "TokenFormatter",
    "__version__",
]
