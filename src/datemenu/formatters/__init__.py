"""Formatter variants and their registry.

Variants share one contract: construct with (timezone, locale, calendar),
then call format(pattern, instant). Class attributes describe the variant:
label, description, capability flags and help tables.

Built-in variants:
    01_luxon     TokenFormatter - arrow token patterns ("dddd HH:mm")
    02_original  ClassicFormatter - CLDR field letters ("EEEE HH:mm")
    03_swatch    BeatsFormatter - Swatch Internet Time ("@bbb.s")

Python 3.13+.
"""

from .base import (
    BaseFormatter,
    FormatterCapabilities,
    FormatterHelp,
    HelpRow,
    create_formatter_base,
    expand_newlines,
)
from .beats import BIEL_MEAN_TIME, BeatsFormatter, beats
from .classic import ClassicFormatter
from .registry import (
    BUILTIN_FORMATTERS,
    ENTRY_POINT_GROUP,
    FormatterListing,
    FormatterRegistry,
    VariantDescriptor,
)
from .tokens import TokenFormatter, arrow_locale_name

__all__ = [
    "BIEL_MEAN_TIME",
    "BUILTIN_FORMATTERS",
    "ENTRY_POINT_GROUP",
    "BaseFormatter",
    "BeatsFormatter",
    "ClassicFormatter",
    "FormatterCapabilities",
    "FormatterHelp",
    "FormatterListing",
    "FormatterRegistry",
    "HelpRow",
    "TokenFormatter",
    "VariantDescriptor",
    "arrow_locale_name",
    "beats",
    "create_formatter_base",
    "expand_newlines",
]
