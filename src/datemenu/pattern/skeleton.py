"""Auto-format support: unmarked patterns as locale skeleton requests.

A pattern without the explicit-pattern marker does not prescribe layout. Its
field runs only say which fields should appear and how wide; the locale
decides order, separators and 12/24-hour clock. The runs are turned into a
CLDR skeleton (e.g. "MMMd", "jmm") and matched against the locale's
available formats with Babel.

Python 3.13+. Uses Babel for locale data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from babel.dates import match_skeleton, parse_pattern, tokenize_pattern, untokenize_pattern

from datemenu.pattern.fields import FIELD_RULES
from datemenu.pattern.tokenizer import FieldRun, tokenize

if TYPE_CHECKING:
    from babel import Locale
    from babel.dates import DateTimePattern

__all__ = [
    "DEFAULT_SKELETON",
    "adjust_field_widths",
    "build_skeleton",
    "match_locale_pattern",
    "preferred_hour_letter",
]

# Fields rendered when a pattern names none (numeric year, month and day).
DEFAULT_SKELETON = "yMd"

# Skeleton letter and widths per field, indexed by style ordinal
# (numeric, 2-digit, short, long, narrow).
_SKELETON_WIDTHS: dict[str, tuple[str, ...]] = {
    "era": ("G", "G", "G", "GGGG", "GGGGG"),
    "year": ("y", "yy", "y", "y", "y"),
    "month": ("M", "MM", "MMM", "MMMM", "MMMMM"),
    "day": ("d", "dd", "d", "d", "d"),
    "weekday": ("E", "E", "E", "EEEE", "EEEEE"),
    "minute": ("m", "mm", "mm", "mm", "mm"),
    "second": ("s", "ss", "ss", "ss", "ss"),
    "timeZoneName": ("z", "z", "z", "zzzz", "zzzz"),
}

# Pattern letter -> skeleton letter whose width it follows. Numeric-only
# fields other than the day (years, hours, minutes, seconds) are left alone.
_WIDTH_GROUPS: dict[str, str] = {
    "G": "G",
    "M": "M",
    "L": "M",
    "d": "d",
    "E": "E",
    "c": "E",
    "e": "E",
    "z": "z",
    "v": "z",
}
_TEXT_GROUPS = frozenset("GEz")
_SHORT_TEXT_WIDTH = 3

_TWELVE_HOUR_LETTERS = frozenset("hK")
_TWENTY_FOUR_HOUR_LETTERS = frozenset("Hk")
_PERIOD_LETTERS = frozenset("abB")


def preferred_hour_letter(locale: Locale) -> str:
    """Hour letter of the locale's short time format: "h" or "H"."""
    time_format = locale.time_formats.get("short")
    pattern = getattr(time_format, "pattern", str(time_format or ""))
    return "h" if ("h" in pattern or "K" in pattern) else "H"


def build_skeleton(pattern: str, locale: Locale) -> str:
    """Build a CLDR skeleton from the field runs of an unmarked pattern.

    Literal text and letters without a field rule (and week of year) do not
    contribute. An explicit period letter forces the 12-hour clock; j, J and C
    select the locale's preferred hour cycle.

    Example:
        >>> from babel import Locale
        >>> build_skeleton("EEEE d MMMM", Locale.parse("en_US"))
        'EEEEdMMMM'
    """
    runs = [
        seg for seg in tokenize(pattern, keep_auto_letters=True) if isinstance(seg, FieldRun)
    ]
    has_period = any(run.letter in _PERIOD_LETTERS for run in runs)
    parts: dict[str, str] = {}
    hour_width = 0
    hour_letter = ""

    for run in runs:
        rule = FIELD_RULES.get(run.letter)
        if rule is None or rule.field == "week":
            continue
        index = rule.style_index(run.length)
        if rule.field == "period":
            hour_width = hour_width or 1
            continue
        if rule.field == "hour":
            hour_width = 2 if index >= 1 else 1
            hour_letter = run.letter
            continue
        parts[rule.field] = _SKELETON_WIDTHS[rule.field][index]

    if hour_width:
        if has_period or hour_letter in _TWELVE_HOUR_LETTERS:
            letter = "h"
        elif hour_letter in _TWENTY_FOUR_HOUR_LETTERS:
            letter = "H"
        else:
            letter = preferred_hour_letter(locale)
        parts["hour"] = letter * hour_width

    return "".join(parts.values()) or DEFAULT_SKELETON


def adjust_field_widths(skeleton: str, locale_pattern: DateTimePattern) -> DateTimePattern:
    """Widen the fields of a matched locale pattern to the requested widths.

    A closest match may carry narrower fields than asked for ("E, MMM d" for
    "EEEEdMMMM"). Text fields take the requested width; numeric fields stay
    numeric. Hours, minutes, seconds and years keep the locale's width.

    Example:
        >>> from babel.dates import parse_pattern
        >>> adjust_field_widths("EEEEdMMMM", parse_pattern("E, MMM d")).pattern
        'EEEE, MMMM d'
    """
    requested: dict[str, int] = {}
    for kind, value in tokenize_pattern(skeleton):
        if kind == "field":
            letter, width = value
            group = _WIDTH_GROUPS.get(letter)
            if group is not None:
                requested[group] = width

    changed = False
    tokens: list[tuple[str, str | tuple[str, int]]] = []
    for kind, value in tokenize_pattern(locale_pattern.pattern):
        if kind == "field":
            letter, width = value
            group = _WIDTH_GROUPS.get(letter)
            wanted = requested.get(group, width) if group is not None else width
            if group == "E" and group in requested:
                # E, EE and EEE all request the abbreviated weekday
                wanted = max(wanted, _SHORT_TEXT_WIDTH)
            if wanted != width and _is_text(group, wanted) == _is_text(group, width):
                value = (letter, wanted)
                changed = True
        tokens.append((kind, value))

    if not changed:
        return locale_pattern
    return parse_pattern(untokenize_pattern(tokens))


def _is_text(group: str | None, width: int) -> bool:
    if group == "M":
        return width >= _SHORT_TEXT_WIDTH
    return group in _TEXT_GROUPS


def match_locale_pattern(skeleton: str, locale: Locale) -> DateTimePattern | None:
    """Find the locale's pattern for a skeleton, or None when nothing matches.

    Fields of the matched pattern are widened to the skeleton's widths.
    """
    skeletons = locale.datetime_skeletons
    if skeleton in skeletons:
        return skeletons[skeleton]
    best = match_skeleton(skeleton, skeletons)
    if best is None:
        return None
    return adjust_field_widths(skeleton, skeletons[best])
