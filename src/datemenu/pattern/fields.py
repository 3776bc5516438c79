"""Field resolver: one field-specifier run to one renderer.

Maps a run of a repeated field letter (e.g. "EEEE") to a function rendering
that single field for an instant. Two resolution paths exist:

- Delegated: locale-dependent fields (names of months, weekdays, eras, time
  zones, day periods) are rendered by Babel with a pattern scoped to exactly
  this one field and style. Hours, minutes, seconds and 5-digit years are
  computed numerically on this path, because their padding rules are fixed.
- Direct: arithmetic fields (quarter, week numbers, fractional seconds, ISO
  offsets, ...) are computed from the local wall-clock time, see
  datemenu.pattern.direct.

Run length selects a display style through a per-letter rule table:
index = length - 1 + offset, clamped to the rule's [minimum, maximum],
looked up in STYLES.

Python 3.13+. Uses Babel for locale data.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from functools import partial
from typing import TYPE_CHECKING

from babel.dates import parse_pattern

from datemenu.constants import SUNDAY
from datemenu.pattern.direct import DIRECT_RULES, week_of_year

if TYPE_CHECKING:
    from babel import Locale

    from datemenu.runtime.cache import Renderer

__all__ = ["FIELD_RULES", "STYLES", "FieldResolver", "FieldRule"]

logger = logging.getLogger(__name__)

STYLES: tuple[str, ...] = ("numeric", "2-digit", "short", "long", "narrow")

_MAX_DELEGATED_LENGTH = 5
_MAX_WEEKDAY_LENGTH = 5
_SHORT_WEEKDAY_WIDTH = 2


def _year_index(length: int) -> int:
    return 1 if length == 2 else 0


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Style rule for one field letter.

    Attributes:
        field: Semantic field name (era, year, month, ...)
        offset: Added to (length - 1), or a function of the length that
            returns the style index directly (no clamping)
        minimum: Lowest style index, None for no clamp
        maximum: Highest style index, None for no clamp
    """

    field: str
    offset: int | Callable[[int], int] = 0
    minimum: int | None = None
    maximum: int | None = None

    def style_index(self, length: int) -> int:
        """Style ordinal (index into STYLES) for a run length."""
        if callable(self.offset):
            return self.offset(length)
        index = length - 1 + self.offset
        if self.minimum is not None:
            index = max(index, self.minimum)
        if self.maximum is not None:
            index = min(index, self.maximum)
        return min(index, len(STYLES) - 1)

    def style(self, length: int) -> str:
        """Style name for a run length, e.g. "long" for "MMMM"."""
        return STYLES[self.style_index(length)]


def _rules(letters: str, rule: FieldRule) -> dict[str, FieldRule]:
    return dict.fromkeys(letters, rule)


FIELD_RULES: dict[str, FieldRule] = {
    **_rules("G", FieldRule("era", minimum=2)),
    **_rules("yY", FieldRule("year", offset=_year_index)),
    **_rules("ur", FieldRule("year")),
    **_rules("ML", FieldRule("month")),
    **_rules("w", FieldRule("week", minimum=0, maximum=1)),
    **_rules("d", FieldRule("day", minimum=0, maximum=1)),
    **_rules("E", FieldRule("weekday", minimum=2, maximum=4)),
    **_rules("ec", FieldRule("weekday", minimum=2, maximum=5)),
    **_rules("abB", FieldRule("period")),
    **_rules("hHkKjJC", FieldRule("hour", minimum=0, maximum=1)),
    **_rules("m", FieldRule("minute", minimum=0, maximum=1)),
    **_rules("s", FieldRule("second", minimum=0, maximum=1)),
    **_rules("zZv", FieldRule("timeZoneName", minimum=2, maximum=3)),
    **_rules("V", FieldRule("timeZoneName", minimum=3, maximum=3)),
    **_rules("Xx", FieldRule("timeZoneName", minimum=2, maximum=2)),
}

# Letters never rendered through locale data.
_DIRECT_ONLY = frozenset("wW")

# Babel patterns for a single locale-dependent field, keyed by (field, style).
# Stand-alone forms (L, c) match how a month or weekday reads on its own.
_BABEL_FIELD_PATTERNS: dict[tuple[str, str], str] = {
    ("era", "short"): "G",
    ("era", "long"): "GGGG",
    ("era", "narrow"): "GGGGG",
    ("year", "numeric"): "y",
    ("year", "2-digit"): "yy",
    ("month", "numeric"): "L",
    ("month", "2-digit"): "LL",
    ("month", "short"): "LLL",
    ("month", "long"): "LLLL",
    ("month", "narrow"): "LLLLL",
    ("day", "numeric"): "d",
    ("day", "2-digit"): "dd",
    ("weekday", "short"): "ccc",
    ("weekday", "long"): "cccc",
    ("weekday", "narrow"): "ccccc",
    ("timeZoneName", "short"): "z",
    ("timeZoneName", "long"): "zzzz",
}
_GENERIC_ZONE_PATTERNS = {"short": "v", "long": "vvvv"}


def _hour(letter: str, length: int, value: datetime) -> str:
    hour = value.hour
    if not hour and letter in "HK":
        hour = 24
    elif not hour and letter == "h":
        hour = 12
    if hour > 12 and letter in "hK":
        hour -= 12
    return str(hour).zfill(length)


def _minute(length: int, value: datetime) -> str:
    return str(value.minute).zfill(length)


def _second(length: int, value: datetime) -> str:
    return str(value.second).zfill(length)


def _year5(value: datetime) -> str:
    return str(value.year).zfill(5)


class FieldResolver:
    """Resolve single field specifiers for one locale and time zone.

    Renderers returned by resolve() accept any aware datetime and convert it
    to the resolver's time zone before rendering.

    Example:
        >>> from datetime import UTC
        >>> from babel import Locale
        >>> resolver = FieldResolver(Locale.parse("en_US"), UTC)
        >>> render = resolver.resolve("H", 2)
        >>> render(datetime(2024, 1, 1, 0, 5, tzinfo=UTC))
        '24'
    """

    __slots__ = ("_first_weekday", "_locale", "_tzinfo")

    def __init__(self, locale: Locale, tz: tzinfo, *, first_weekday: int = SUNDAY) -> None:
        """Initialize resolver.

        Args:
            locale: Babel locale used for names
            tz: Time zone the instant is rendered in
            first_weekday: First day of week for week-of-year (Monday == 0)
        """
        self._locale = locale
        self._tzinfo = tz
        self._first_weekday = first_weekday

    @property
    def locale(self) -> Locale:
        """Babel locale used for locale-dependent fields."""
        return self._locale

    @property
    def timezone(self) -> tzinfo:
        """Time zone instants are converted to."""
        return self._tzinfo

    def localize(self, instant: datetime) -> datetime:
        """Convert an instant to the resolver's time zone."""
        return instant.astimezone(self._tzinfo)

    def resolve(self, letter: str, length: int) -> Renderer | None:
        """Return a renderer for a field run, or None if unsupported.

        Args:
            letter: Field letter
            length: Run length (>= 1)

        Returns:
            Renderer, or None when the letter/length has no rendering
        """
        local_fn = self._resolve_local(letter, length)
        if local_fn is None:
            logger.debug("No renderer for field %r", letter * length)
            return None
        localize = self.localize
        return lambda instant: local_fn(localize(instant))

    def _resolve_local(self, letter: str, length: int) -> Callable[[datetime], str] | None:
        """Resolve to a function of an already localized datetime."""
        if length > _MAX_WEEKDAY_LENGTH and letter in "eEc":
            short = self._resolve_local(letter, 3)
            if short is None:
                return None
            return lambda value: short(value)[:_SHORT_WEEKDAY_WIDTH]

        delegated = self._delegated(letter, length)
        if delegated is not None:
            return delegated

        if letter == "w":
            first_weekday = self._first_weekday
            return lambda value: week_of_year(value, length, first_weekday)
        direct = DIRECT_RULES.get(letter)
        if direct is None:
            return None
        return lambda value: direct(value, length)

    def _delegated(self, letter: str, length: int) -> Callable[[datetime], str] | None:
        """Locale-aware (or fixed-numeric) rendering of a table letter."""
        if letter in _DIRECT_ONLY or length > _MAX_DELEGATED_LENGTH:
            return None
        rule = FIELD_RULES.get(letter)
        if rule is None:
            return None
        if letter in "xX" or (letter == "Z" and length >= 3):
            return None

        field = rule.field
        style = rule.style(length)

        if field == "hour":
            return partial(_hour, letter, length)
        if field == "minute":
            return partial(_minute, length)
        if field == "second":
            return partial(_second, length)
        if field == "year" and length == 5:
            return _year5
        if field == "period":
            return self._babel_field("a", length)
        if field == "timeZoneName" and letter == "v" and self._has_zone_key():
            return self._babel_field(_GENERIC_ZONE_PATTERNS[style], length)

        babel_pattern = _BABEL_FIELD_PATTERNS.get((field, style))
        if babel_pattern is None:
            # e.g. "uuu": styles with no meaning for the field render numeric
            babel_pattern = _BABEL_FIELD_PATTERNS.get((field, "numeric"))
        if babel_pattern is None:
            return None
        return self._babel_field(babel_pattern, length)

    def _has_zone_key(self) -> bool:
        # Fixed offsets have no generic name; v falls back to the z rendering
        return getattr(self._tzinfo, "key", None) is not None

    def _babel_field(self, babel_pattern: str, length: int) -> Callable[[datetime], str]:
        compiled = parse_pattern(babel_pattern)
        locale = self._locale

        def render(value: datetime) -> str:
            text = str(compiled.apply(value, locale))
            return text.zfill(length) if text.isdigit() else text

        return render
