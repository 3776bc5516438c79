"""Classic ICU-style pattern formatter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from datemenu.constants import PATTERN_MARKER
from datemenu.diagnostics import ConfigurationError
from datemenu.formatters.base import FormatterHelp, create_formatter_base, expand_newlines
from datemenu.locale_utils import resolve_locale, resolve_timezone
from datemenu.pattern import DatePatternFormatter

if TYPE_CHECKING:
    from datetime import datetime

    from datemenu.diagnostics import Diagnostic

__all__ = ["ClassicFormatter"]

logger = logging.getLogger(__name__)


class ClassicFormatter(
    create_formatter_base(
        "SimpleDateFormat",
        "Unicode CLDR date field patterns",
        custom_timezone=True,
        custom_locale=True,
    )
):
    """Render CLDR field-letter patterns ("yyyy-MM-dd", "EEEE HH:mm").

    The user pattern is always taken as explicit field letters; literal text
    goes in single quotes. The calendar setting is accepted and ignored.
    """

    help = FormatterHelp(
        link="https://www.unicode.org/reports/tr35/tr35-dates.html#Date_Field_Symbol_Table",
        left=[
            ("y", "year", "2023"),
            ("yy", "year (2 digits only)", "23"),
            ("", "", ""),
            ("M", "month (numeric)", "4"),
            ("MM", "month (numeric, padded)", "04"),
            ("MMM", "month (short)", "Apr"),
            ("MMMM", "month (full)", "April"),
            ("MMMMM", "month (narrow)", "A"),
            ("", "", ""),
            ("w", "week of year", "9"),
            ("ww", "week of year (padded)", "09"),
            ("W", "week of month", "2"),
            ("", "", ""),
            ("d", "day of month", "7"),
            ("dd", "day of month (padded)", "07"),
            ("", "", ""),
            ("'text'", "literal text", ""),
        ],
        right=[
            ("EEE", "weekday (abbrev.)", "Tue"),
            ("EEEE", "weekday (full)", "Tuesday"),
            ("EEEEE", "weekday (narrow)", "T"),
            ("EEEEEE", "weekday (short)", "Tu"),
            ("", "", ""),
            ("h", "hour", "1-12"),
            ("hh", "hour (padded)", "01-12"),
            ("k", "hour", "0-23"),
            ("kk", "hour (padded)", "00-23"),
            ("", "", ""),
            ("m", "minute", "7"),
            ("mm", "minute (padded)", "07"),
            ("", "", ""),
            ("aaa", "period (am/pm)", ""),
            ("", "", ""),
            ("", "", ""),
            ("\\n", "new line", ""),
        ],
    )

    def configure(
        self,
        timezone: str | None,
        locale: str | None,
        calendar: str | None,
    ) -> None:
        self._formatter: DatePatternFormatter | None = None
        self._rejected: Diagnostic | str = ""
        try:
            self._formatter = DatePatternFormatter(resolve_locale(locale), resolve_timezone(timezone))
        except ConfigurationError as e:
            # Raised from format()
            logger.debug("ClassicFormatter configuration rejected: %s", e)
            self._rejected = e.diagnostic or str(e)

    def format(self, pattern: str, instant: datetime) -> str:
        """Render pattern for instant.

        Raises:
            ConfigurationError: If the locale or time zone was rejected
            FormattingError: If rendering fails
        """
        if self._formatter is None:
            raise ConfigurationError(self._rejected)
        return self._formatter.format(PATTERN_MARKER + expand_newlines(pattern), instant)
