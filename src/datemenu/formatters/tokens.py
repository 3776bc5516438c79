"""Token-table formatter backed by arrow.

Patterns are arrow format strings ("dddd, D MMMM YYYY HH:mm"); bracketed text
is literal. The variant only reconfigures the instant (time zone, locale) and
hands the pattern to arrow's own formatter.

Python 3.13+. Uses arrow for token formatting.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

import arrow
from arrow import locales as arrow_locales

from datemenu.constants import GREGORIAN_CALENDARS
from datemenu.diagnostics import ConfigurationError, ErrorTemplate, FormattingError
from datemenu.formatters.base import FormatterHelp, create_formatter_base, expand_newlines
from datemenu.locale_utils import get_system_locale, is_default, normalize_locale, resolve_timezone

if TYPE_CHECKING:
    from datemenu.diagnostics import Diagnostic

__all__ = ["TokenFormatter", "arrow_locale_name"]

logger = logging.getLogger(__name__)

FORMATTER_KEY = "01_luxon"
_FALLBACK_LOCALE = "en-us"


def arrow_locale_name(locale_code: str) -> str | None:
    """Map a locale code to a name arrow supports, or None.

    Tries the full tag first, then its language subtag.

    Example:
        >>> arrow_locale_name("de_CH.UTF-8")
        'de-ch'
    """
    name = normalize_locale(locale_code).lower().replace("_", "-")
    for candidate in (name, name.split("-")[0]):
        try:
            arrow_locales.get_locale(candidate)
        except ValueError:
            continue
        return candidate
    return None


class TokenFormatter(
    create_formatter_base(
        "Luxon",
        "Token based formatting",
        custom_timezone=True,
        custom_locale=True,
        custom_calendar=True,
    )
):
    """Render token patterns with arrow.

    Only Gregorian calendars can be rendered; any other calendar setting makes
    format() raise ConfigurationError.
    """

    help = FormatterHelp(
        link="https://arrow.readthedocs.io/en/latest/guide.html#supported-tokens",
        left=[
            ("YYYY", "year", "2023"),
            ("YY", "year (2 digits only)", "23"),
            ("", "", ""),
            ("M", "month (numeric)", "4"),
            ("MM", "month (numeric, padded)", "04"),
            ("MMM", "month (short)", "Apr"),
            ("MMMM", "month (full)", "April"),
            ("", "", ""),
            ("W", "ISO week date", "2023-W14-5"),
            ("", "", ""),
            ("D", "day of month", "7"),
            ("DD", "day of month (padded)", "07"),
            ("Do", "day of month (ordinal)", "7th"),
            ("DDDD", "day of year (padded to 3)", "097"),
            ("", "", ""),
            ("[text]", "literal text", ""),
        ],
        right=[
            ("d", "weekday (numeric)", "1-7"),
            ("ddd", "weekday (abbrev.)", "Tue"),
            ("dddd", "weekday (full)", "Tuesday"),
            ("", "", ""),
            ("h", "hour", "1-12"),
            ("hh", "hour (padded)", "01-12"),
            ("H", "hour", "0-23"),
            ("HH", "hour (padded)", "00-23"),
            ("A", "AM-PM", "PM"),
            ("", "", ""),
            ("m", "minute", "7"),
            ("mm", "minute (padded)", "07"),
            ("ss", "second (padded)", "09"),
            ("", "", ""),
            ("ZZ", "UTC offset", "+02:00"),
            ("\\n", "new line", ""),
        ],
    )

    def configure(
        self,
        timezone: str | None,
        locale: str | None,
        calendar: str | None,
    ) -> None:
        self._tzinfo: tzinfo | None = None
        self._locale = _FALLBACK_LOCALE
        self._rejected: Diagnostic | str = ""
        try:
            self._tzinfo = resolve_timezone(timezone)
            self._locale = self._resolve_locale(locale)
            calendar_id = None if calendar is None or is_default(calendar) else calendar.strip()
            if calendar_id is not None and calendar_id.lower() not in GREGORIAN_CALENDARS:
                raise ConfigurationError(ErrorTemplate.calendar_unsupported(calendar_id, FORMATTER_KEY))
        except ConfigurationError as e:
            logger.debug("TokenFormatter configuration rejected: %s", e)
            self._tzinfo = None
            self._rejected = e.diagnostic or str(e)

    @staticmethod
    def _resolve_locale(locale: str | None) -> str:
        if locale is None or is_default(locale):
            system = get_system_locale()
            name = arrow_locale_name(system)
            if name is None:
                logger.warning("Locale %s not supported by arrow, using %s", system, _FALLBACK_LOCALE)
                return _FALLBACK_LOCALE
            return name
        name = arrow_locale_name(locale)
        if name is None:
            raise ConfigurationError(ErrorTemplate.locale_unknown(locale, "not supported by arrow"))
        return name

    def format(self, pattern: str, instant: datetime) -> str:
        """Render pattern for instant.

        Raises:
            ConfigurationError: If the time zone, locale or calendar was rejected
            FormattingError: If arrow cannot render the pattern
        """
        if self._tzinfo is None:
            raise ConfigurationError(self._rejected)
        aware = instant if instant.tzinfo is not None else instant.astimezone()
        moment = arrow.get(aware).to(self._tzinfo)
        try:
            return str(moment.format(expand_newlines(pattern), locale=self._locale))
        except (ValueError, AttributeError, KeyError, TypeError) as e:
            raise FormattingError(ErrorTemplate.pattern_invalid(pattern, str(e))) from e
