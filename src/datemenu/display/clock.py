"""Live clock label state.

ClockDisplay owns the text shown in the panel. Each tick renders the current
instant; when rendering fails the previous text stays (or the host's own
clock text before the first success), so the label never shows an error or
goes blank. Each distinct failure is logged once.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from datemenu.constants import FALLBACK_TEXT
from datemenu.diagnostics import DateMenuError, DiagnosticFormatter, OutputFormat
from datemenu.display.schedule import UpdateLoop

if TYPE_CHECKING:
    from datemenu.display.settings import DisplaySettings
    from datemenu.formatters.base import BaseFormatter
    from datemenu.formatters.registry import FormatterRegistry

__all__ = ["ClockDisplay"]

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ClockDisplay:
    """Text of the clock label, refreshed by tick().

    Example:
        >>> from datemenu.formatters import BeatsFormatter
        >>> display = ClockDisplay(BeatsFormatter(), "@bbb")
        >>> display.tick()
        True
        >>> display.text.startswith("@")
        True
    """

    __slots__ = (
        "_fallback",
        "_formatter",
        "_log_formatter",
        "_now",
        "_on_text",
        "_pattern",
        "_reported",
        "_shown",
        "_text",
    )

    def __init__(
        self,
        formatter: BaseFormatter,
        pattern: str,
        *,
        fallback_text: str | Callable[[], str] = FALLBACK_TEXT,
        now: Callable[[], datetime] = _local_now,
        on_text: Callable[[str], None] | None = None,
        log_format: OutputFormat = OutputFormat.SIMPLE,
    ) -> None:
        """Initialize display.

        Args:
            formatter: Configured formatter variant
            pattern: Pattern in the variant's dialect
            fallback_text: Text (or getter of the host clock's text) shown
                until the first successful render
            now: Source of the current instant
            on_text: Called with the new text whenever it changes
            log_format: Layout of logged failure diagnostics
        """
        self._formatter = formatter
        self._pattern = pattern
        self._fallback = fallback_text
        self._now = now
        self._on_text = on_text
        self._text = ""
        self._shown = ""
        self._reported: set[str] = set()
        self._log_formatter = DiagnosticFormatter(output_format=log_format, sanitize=True)

    @classmethod
    def from_settings(
        cls,
        settings: DisplaySettings,
        registry: FormatterRegistry,
        **kwargs: object,
    ) -> ClockDisplay:
        """Build a display for the variant and configuration in settings.

        Raises:
            DiscoveryError: If the registry is not loaded
            FormatterNotFoundError: If settings name an unknown variant
        """
        formatter_cls = registry.get_formatter(settings.formatter)
        config = settings.formatter_configuration(formatter_cls.capabilities)
        formatter = formatter_cls(config.timezone, config.locale, config.calendar)
        return cls(formatter, settings.pattern, **kwargs)  # type: ignore[arg-type]

    @property
    def text(self) -> str:
        """Current label text; never empty once fallback text exists."""
        return self._text or self._fallback_text()

    @property
    def formatter(self) -> BaseFormatter:
        """Formatter variant in use."""
        return self._formatter

    @property
    def pattern(self) -> str:
        """Pattern in use."""
        return self._pattern

    def tick(self) -> bool:
        """Re-render the label. Always returns True (keep ticking)."""
        try:
            text = self._formatter.format(self._pattern, self._now())
        except DateMenuError as e:
            self._report(e)
            text = ""
        if text:
            self._text = text
        self._publish(self.text)
        return True

    def reconfigure(
        self,
        formatter: BaseFormatter | None = None,
        pattern: str | None = None,
    ) -> None:
        """Swap formatter and/or pattern. Failures are reported afresh."""
        if formatter is not None:
            self._formatter = formatter
        if pattern is not None:
            self._pattern = pattern
        self._reported.clear()

    def update_loop(self, settings: DisplaySettings) -> UpdateLoop:
        """Loop ticking this display at the cadence in settings."""
        return UpdateLoop(self.tick, settings.update_rate)

    def _fallback_text(self) -> str:
        fallback = self._fallback
        return fallback() if callable(fallback) else fallback

    def _publish(self, text: str) -> None:
        if text == self._shown:
            return
        self._shown = text
        if self._on_text is not None:
            self._on_text(text)

    def _report(self, error: DateMenuError) -> None:
        if error.diagnostic is None:
            message = str(error)
        else:
            message = self._log_formatter.format(error.diagnostic)
        if message in self._reported:
            return
        self._reported.add(message)
        logger.warning("Formatting %r failed: %s", self._pattern, message)
