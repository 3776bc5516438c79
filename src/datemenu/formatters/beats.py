"""Swatch Internet Time formatter.

A day has 1000 beats of 86.4 seconds, counted in Biel Mean Time (UTC+1, no
daylight saving). The pattern is not a grammar: every run of "b" is replaced
by the three-digit beat count and every run of "s" by the two-digit sub-beat
count. Configuration is ignored.

Example:
    >>> from datetime import datetime, timedelta, timezone
    >>> noon_bmt = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=1)))
    >>> BeatsFormatter().format("@bbb.s", noon_bmt)
    '@500.00'

Python 3.13+. Zero external dependencies.
"""

import re
from datetime import datetime, timedelta, timezone

from datemenu.formatters.base import FormatterHelp, create_formatter_base, expand_newlines

__all__ = ["BIEL_MEAN_TIME", "BeatsFormatter", "beats"]

BIEL_MEAN_TIME = timezone(timedelta(hours=1), "BMT")
SECONDS_PER_BEAT = 86.4

_BEATS_RE = re.compile(r"b+")
_SUB_BEATS_RE = re.compile(r"s+")


def beats(instant: datetime) -> tuple[str, str]:
    """Beat count and sub-beat count of an instant, zero-padded.

    Returns:
        ("500", "00") for 12:00:00 BMT
    """
    local = instant.astimezone(BIEL_MEAN_TIME)
    seconds = (local.hour * 60 + local.minute) * 60 + local.second
    whole, fraction = f"{seconds / SECONDS_PER_BEAT:.2f}".split(".")
    return whole.zfill(3), fraction


class BeatsFormatter(create_formatter_base("Swatch Beats", "Swatch Internet Time")):
    """Render Swatch beats by substituting "b" and "s" runs."""

    help = FormatterHelp(
        left=[("b", "Beats", "500")],
        right=[("s", "Sub Beats", "12")],
    )

    def format(self, pattern: str, instant: datetime) -> str:
        whole, fraction = beats(instant)
        text = _BEATS_RE.sub(whole, expand_newlines(pattern))
        return _SUB_BEATS_RE.sub(fraction, text)
