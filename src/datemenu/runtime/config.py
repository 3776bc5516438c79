"""Formatter configuration.

Provides a single frozen dataclass holding the (timezone, locale, calendar)
triple a formatter is built for. A settings change produces a new
configuration and a new formatter; nothing is mutated in place.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import TYPE_CHECKING

from datemenu.constants import GREGORIAN_CALENDARS
from datemenu.locale_utils import is_default, resolve_locale, resolve_timezone

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["FormatterConfiguration", "ResolvedConfiguration"]


@dataclass(frozen=True, slots=True)
class FormatterConfiguration:
    """Immutable formatter configuration.

    Each field is either an explicit value or None meaning "use the system
    default". Empty strings and the "default"/"system" sentinels are
    normalized to None at construction time, so two configurations that
    select the same thing compare (and hash) equal.

    Attributes:
        timezone: IANA zone name, fixed offset, or None for the system zone
        locale: BCP-47 tag, or None for the system locale
        calendar: CLDR calendar identifier, or None for the locale default

    Example:
        >>> config = FormatterConfiguration(timezone="Europe/Zurich", locale="de-CH")
        >>> config.calendar is None
        True
        >>> FormatterConfiguration(locale="default") == FormatterConfiguration()
        True
    """

    timezone: str | None = None
    locale: str | None = None
    calendar: str | None = None

    def __post_init__(self) -> None:
        """Normalize sentinels and validate field types.

        Raises:
            TypeError: If a field is neither str nor None
        """
        for name in ("timezone", "locale", "calendar"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                msg = f"{name} must be str or None, got {type(value).__name__}"
                raise TypeError(msg)
            normalized = None if is_default(value) else value.strip()  # type: ignore[union-attr]
            object.__setattr__(self, name, normalized)

    @property
    def uses_gregorian_calendar(self) -> bool:
        """True when the calendar is unset or one of the Gregorian identifiers."""
        return self.calendar is None or self.calendar.lower() in GREGORIAN_CALENDARS

    def resolve(self) -> ResolvedConfiguration:
        """Resolve names into concrete tzinfo and Babel Locale objects.

        Raises:
            ConfigurationError: If the locale or time zone is unknown
        """
        return ResolvedConfiguration(
            tzinfo=resolve_timezone(self.timezone),
            locale=resolve_locale(self.locale),
            calendar=self.calendar,
        )


@dataclass(frozen=True, slots=True)
class ResolvedConfiguration:
    """Concrete objects behind a FormatterConfiguration."""

    tzinfo: tzinfo
    locale: Locale
    calendar: str | None = None
