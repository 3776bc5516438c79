"""Locale and time zone utilities.

Centralizes locale normalization, Babel locale lookup and time zone
resolution. Every configuration value crosses the system boundary here, so
both the pattern engine and the formatter variants see the same rules.

Python 3.13+. Uses Babel for locale data, zoneinfo for IANA zones.
"""

from __future__ import annotations

import functools
import os
import re
from datetime import UTC, datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from datemenu.constants import DEFAULT_SENTINELS
from datemenu.diagnostics import ConfigurationError, ErrorTemplate

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "get_system_timezone",
    "is_default",
    "normalize_locale",
    "resolve_locale",
    "resolve_timezone",
    "timezone_name",
]

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_ZONEINFO_MARKER = "zoneinfo/"


def is_default(value: str | None) -> bool:
    """Check whether a configuration value means "use the system default".

    Example:
        >>> is_default(None), is_default(" default "), is_default("de-DE")
        (True, True, False)
    """
    return value is None or value.strip().lower() in DEFAULT_SENTINELS


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Encoding suffixes from environment variables ("de_DE.UTF-8") are dropped.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("de_DE.UTF-8")
        'de_DE'
    """
    return locale_code.strip().split(".")[0].replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_system_locale() -> str:
    """Detect the system locale for date/time formatting.

    Detection order:
    1. Python locale.getlocale(LC_TIME) (OS-level locale)
    2. LC_ALL, LC_TIME and LANG environment variables

    Filters out "C" and "POSIX" pseudo-locales.

    Returns:
        Detected locale code in POSIX format, "en_US" when undeterminable.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale(locale_module.LC_TIME)
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_TIME", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", "C.UTF-8"):
            return normalize_locale(value)

    return "en_US"


def get_system_timezone() -> tzinfo:
    """Resolve the machine's local time zone.

    Prefers a named IANA zone (TZ variable, then the /etc/localtime link) so
    that zone names and DST transitions render correctly; falls back to the
    fixed offset reported by the C library.
    """
    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env:
        try:
            return ZoneInfo(tz_env)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass

    localtime = Path("/etc/localtime")
    try:
        target = str(localtime.resolve())
    except OSError:
        target = ""
    if _ZONEINFO_MARKER in target:
        key = target.split(_ZONEINFO_MARKER, 1)[1]
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass

    return datetime.now().astimezone().tzinfo or UTC


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve a time zone setting into a tzinfo.

    Supported forms:
      - None / "" / "default" / "system" / "local" -> system zone
      - "UTC" / "Z" / "GMT" -> UTC
      - Fixed offsets: "+02:00", "+0200", "-05:00"
      - IANA names, e.g. "Europe/Zurich"

    Raises:
        ConfigurationError: For unresolvable identifiers
    """
    if name is None or is_default(name) or name.strip().lower() == "local":
        return get_system_timezone()

    tz_name = name.strip()
    if tz_name.upper() in {"UTC", "Z", "GMT"}:
        return UTC

    match = _OFFSET_RE.match(tz_name)
    if match:
        sign_s, hh_s, mm_s = match.groups()
        hours, minutes = int(hh_s), int(mm_s)
        if hours > 23 or minutes > 59:
            raise ConfigurationError(ErrorTemplate.timezone_unknown(tz_name))
        sign = 1 if sign_s == "+" else -1
        return timezone(sign * timedelta(hours=hours, minutes=minutes))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ConfigurationError(ErrorTemplate.timezone_unknown(tz_name)) from e


def resolve_locale(locale_code: str | None) -> Locale:
    """Resolve a locale setting into a Babel Locale.

    None and the default sentinels select the system locale.

    Raises:
        ConfigurationError: If the locale is unknown to Babel
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    code = get_system_locale() if locale_code is None or is_default(locale_code) else locale_code
    try:
        return get_babel_locale(code)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise ConfigurationError(ErrorTemplate.locale_unknown(str(code), str(e))) from e


def timezone_name(tz: tzinfo) -> str:
    """Return a stable display name for a tzinfo (IANA key when available)."""
    key = getattr(tz, "key", None)
    if key:
        return str(key)
    return tz.tzname(None) or str(tz)
