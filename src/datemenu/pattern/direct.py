"""Arithmetic field renderers.

Fields whose value is computed directly from the local wall-clock time rather
than looked up in locale data: quarter, week numbers, day-of-week-in-month,
Julian day, fractional seconds, milliseconds in day and ISO-8601 / GMT
offset strings.

Every function takes an already localized datetime and the run length of the
field specifier.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TypeAlias

from datemenu.constants import SUNDAY

__all__ = [
    "DIRECT_RULES",
    "day_of_week_in_month",
    "fractional_seconds",
    "gmt_offset",
    "iso_offset",
    "iso_local_offset",
    "iso_zone_offset",
    "julian_day",
    "milliseconds_in_day",
    "quarter",
    "week_of_month",
    "week_of_year",
    "zone_offset",
]

DirectFn: TypeAlias = Callable[[datetime, int], str]

_QUARTER_PREFIXES = ("", "0", "Q", None, "")
_EPOCH = datetime(1970, 1, 1)
_JULIAN_DAY_AT_EPOCH = 2440587.5
_SECONDS_PER_DAY = 86400


def quarter(value: datetime, length: int) -> str:
    """Quarter of the year.

    Q -> "2", QQ -> "02", QQQ -> "Q2", QQQQ -> "2. quarter", QQQQQ -> "2".
    """
    q = (value.month - 1) // 3 + 1
    if length == 4:
        return f"{q}. quarter"
    if 1 <= length <= len(_QUARTER_PREFIXES):
        return f"{_QUARTER_PREFIXES[length - 1]}{q}"
    return str(q)


def week_of_year(value: datetime, length: int, first_weekday: int = SUNDAY) -> str:
    """Week of year counted from January 1st.

    The week containing January 1st is week 1; a new week starts on
    first_weekday (datetime.weekday() numbering, Monday == 0).
    """
    jan1 = value.replace(month=1, day=1)
    offset = (jan1.weekday() - first_weekday) % 7
    week = (value.timetuple().tm_yday - 1 + offset) // 7 + 1
    return str(week).zfill(length)


def week_of_month(value: datetime, length: int) -> str:
    """Week of month. Not computed: needs locale week data."""
    return "?"


def day_of_week_in_month(value: datetime, length: int) -> str:
    """Occurrence of this weekday within the month ("2" for the 2nd Wednesday)."""
    return str(1 + (value.day - 1) // 7)


def julian_day(value: datetime, length: int) -> str:
    """Julian day number of the local wall-clock time."""
    local = value.replace(tzinfo=None)
    days = (local - _EPOCH) / timedelta(days=1)
    return str(int(days + _JULIAN_DAY_AT_EPOCH))


def fractional_seconds(value: datetime, length: int) -> str:
    """Fractional seconds, truncated or right-padded with zeros to length.

    Example:
        >>> fractional_seconds(datetime(2024, 1, 1, microsecond=4000), 3)
        '004'
    """
    digits = str(1000 + value.microsecond // 1000)
    if length > 3:
        digits = digits.ljust(length + 1, "0")
    return digits[1 : length + 1]


def milliseconds_in_day(value: datetime, length: int) -> str:
    """Milliseconds elapsed since local midnight, left-padded to length."""
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    millis = seconds * 1000 + value.microsecond // 1000
    return str(millis).zfill(length)


def iso_offset(
    value: datetime,
    *,
    gmt: bool = False,
    two_digit_hours: bool = True,
    separator: bool = False,
    seconds: bool = False,
    zero_as_z: bool = False,
    omit_zero_minutes: bool = False,
) -> str:
    """Render the UTC offset of value.

    Args:
        value: Aware datetime
        gmt: Prefix with "GMT" (a zero offset renders just "GMT")
        two_digit_hours: Zero-pad hours to two digits
        separator: Put ":" between hours, minutes and seconds
        seconds: Append offset seconds when non-zero
        zero_as_z: Render a zero offset as "Z"
        omit_zero_minutes: Drop minutes when both minutes and seconds are zero
    """
    offset = value.utcoffset() or timedelta(0)
    total = int(offset.total_seconds())
    if zero_as_z and not total:
        return "Z"
    result = ""
    if gmt:
        result = "GMT"
        if not total:
            return result

    result += "-" if total < 0 else "+"
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    result += f"{hours:02d}" if two_digit_hours else str(hours)

    if not omit_zero_minutes or minutes or secs:
        sep = ":" if separator else ""
        result += f"{sep}{minutes:02d}"
        if seconds and secs:
            result += f"{sep}{secs:02d}"
    return result


def zone_offset(value: datetime, length: int) -> str:
    """Z with run length 3-5: "+0100", "GMT+1:00", "+01:00" / "Z"."""
    long_gmt = length == 4
    return iso_offset(
        value,
        gmt=long_gmt,
        two_digit_hours=not long_gmt,
        separator=length >= 4,
        seconds=length >= 5,
        zero_as_z=length >= 5,
    )


def gmt_offset(value: datetime, length: int) -> str:
    """O: "GMT+1" (short) or "GMT+01:00" (long)."""
    long_form = length >= 3
    return iso_offset(
        value,
        gmt=True,
        two_digit_hours=long_form,
        separator=long_form,
        omit_zero_minutes=not long_form,
    )


def _iso_basic_or_extended(value: datetime, length: int, *, zero_as_z: bool) -> str:
    return iso_offset(
        value,
        separator=length > 1 and length % 2 == 1,
        seconds=length >= 4,
        zero_as_z=zero_as_z,
        omit_zero_minutes=length == 1,
    )


def iso_zone_offset(value: datetime, length: int) -> str:
    """X: ISO-8601 offset with "Z" for UTC ("+01", "+0100", "+01:00", ...)."""
    return _iso_basic_or_extended(value, length, zero_as_z=True)


def iso_local_offset(value: datetime, length: int) -> str:
    """x: ISO-8601 offset without the "Z" shorthand."""
    return _iso_basic_or_extended(value, length, zero_as_z=False)


# Direct renderers keyed by field letter. Week of year ("w") is bound by the
# resolver because it depends on the configured first weekday.
DIRECT_RULES: dict[str, DirectFn] = {
    "Q": quarter,
    "q": quarter,
    "W": week_of_month,
    "F": day_of_week_in_month,
    "g": julian_day,
    "S": fractional_seconds,
    "A": milliseconds_in_day,
    "Z": zone_offset,
    "O": gmt_offset,
    "X": iso_zone_offset,
    "x": iso_local_offset,
}
