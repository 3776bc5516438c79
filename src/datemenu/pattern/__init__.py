"""Classic date pattern engine.

Turns CLDR-style date patterns into cached renderers: a tokenizer, a
per-field resolver (locale-aware names via Babel, arithmetic fields computed
directly) and a compiler composing both.

Public API:
    DatePatternFormatter - compile and render patterns for a locale and zone
    FieldResolver - single field specifier to renderer
    tokenize - split a pattern into Literal and FieldRun segments

Example:
    >>> from datetime import UTC, datetime
    >>> from datemenu.pattern import DatePatternFormatter
    >>> fmt = DatePatternFormatter.get("en-US", "UTC")
    >>> fmt.format("#'Week' w", datetime(2024, 1, 1, tzinfo=UTC))
    'Week 1'

Python 3.13+. Uses Babel for locale data.
"""

from .compiler import DatePatternFormatter
from .fields import FIELD_RULES, STYLES, FieldResolver, FieldRule
from .tokenizer import FieldRun, Literal, Segment, tokenize

__all__ = [
    "FIELD_RULES",
    "STYLES",
    "DatePatternFormatter",
    "FieldResolver",
    "FieldRule",
    "FieldRun",
    "Literal",
    "Segment",
    "tokenize",
]
