"""Tests for ClockDisplay and the help-table markup."""

import asyncio
import json
import logging
from datetime import UTC, datetime

import pytest

from datemenu.diagnostics import OutputFormat
from datemenu.display import ClockDisplay, DisplaySettings, bold, help_table, link, pad_sizes
from datemenu.formatters import BeatsFormatter, ClassicFormatter, FormatterRegistry

APRIL_7 = datetime(2023, 4, 7, 12, 0, tzinfo=UTC)


def fixed_now() -> datetime:
    return APRIL_7


def classic(timezone: str = "UTC") -> ClassicFormatter:
    return ClassicFormatter(timezone=timezone, locale="en-US")


class TestTick:
    """Rendering on each tick."""

    def test_renders(self) -> None:
        """tick() renders the pattern for the current instant."""
        display = ClockDisplay(classic(), "yyyy-MM-dd", now=fixed_now)
        assert display.tick() is True
        assert display.text == "2023-04-07"

    def test_fallback_before_first_render(self) -> None:
        """Fallback text is shown until something renders."""
        display = ClockDisplay(classic(), "HH:mm", fallback_text="12:00", now=fixed_now)
        assert display.text == "12:00"

    def test_fallback_getter(self) -> None:
        """The fallback may be the host clock's live text."""
        host = ["Fri 12:00"]
        display = ClockDisplay(classic("Mars/Olympus"), "HH:mm", fallback_text=lambda: host[0])
        display.tick()
        host[0] = "Fri 12:01"
        assert display.text == "Fri 12:01"

    def test_empty_result_keeps_fallback(self) -> None:
        """A pattern rendering nothing leaves the fallback visible."""
        display = ClockDisplay(classic(), "DDD", fallback_text="...", now=fixed_now)
        display.tick()
        assert display.text == "..."

    def test_on_text_only_on_change(self) -> None:
        """on_text fires when the text changes, not on every tick."""
        published: list[str] = []
        display = ClockDisplay(classic(), "yyyy", now=fixed_now, on_text=published.append)
        display.tick()
        display.tick()
        assert published == ["2023"]


class TestFailureFallback:
    """A failing render keeps the previous text."""

    def test_invalid_timezone_keeps_previous_text(self) -> None:
        """Switching to an unknown zone keeps the last good text."""
        display = ClockDisplay(classic(), "HH:mm", now=fixed_now)
        display.tick()
        assert display.text == "12:00"

        display.reconfigure(formatter=classic("Mars/Olympus"))
        assert display.tick() is True
        assert display.text == "12:00"

    def test_failure_logged_once(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each distinct failure is logged once."""
        display = ClockDisplay(classic("Mars/Olympus"), "HH:mm", now=fixed_now)
        with caplog.at_level(logging.WARNING, logger="datemenu.display.clock"):
            display.tick()
            display.tick()
        assert len([r for r in caplog.records if r.name == "datemenu.display.clock"]) == 1
        assert "Mars/Olympus" in caplog.text

    def test_failure_logged_on_one_line(self, caplog: pytest.LogCaptureFixture) -> None:
        """Failures are logged as single-line diagnostics."""
        display = ClockDisplay(classic("Mars/Olympus"), "HH:mm", now=fixed_now)
        with caplog.at_level(logging.WARNING, logger="datemenu.display.clock"):
            display.tick()
        [record] = [r for r in caplog.records if r.name == "datemenu.display.clock"]
        message = record.getMessage()
        assert "\n" not in message
        assert message.endswith("TIMEZONE_UNKNOWN: Unknown time zone 'Mars/Olympus'")

    def test_failure_logged_as_json(self, caplog: pytest.LogCaptureFixture) -> None:
        """log_format=JSON logs machine-readable diagnostics."""
        display = ClockDisplay(
            classic("Mars/Olympus"), "HH:mm", now=fixed_now, log_format=OutputFormat.JSON
        )
        with caplog.at_level(logging.WARNING, logger="datemenu.display.clock"):
            display.tick()
        [record] = [r for r in caplog.records if r.name == "datemenu.display.clock"]
        payload = record.getMessage().split(" failed: ", 1)[1]
        data = json.loads(payload)
        assert data["code"] == "TIMEZONE_UNKNOWN"
        assert data["timezone"] == "Mars/Olympus"

    def test_reconfigure_reports_again(self, caplog: pytest.LogCaptureFixture) -> None:
        """reconfigure() resets the logged failures."""
        display = ClockDisplay(classic("Mars/Olympus"), "HH:mm", now=fixed_now)
        with caplog.at_level(logging.WARNING, logger="datemenu.display.clock"):
            display.tick()
            display.reconfigure(pattern="mm")
            display.tick()
        assert len([r for r in caplog.records if r.name == "datemenu.display.clock"]) == 2

    def test_recovers(self) -> None:
        """A fixed configuration renders again."""
        display = ClockDisplay(classic("Mars/Olympus"), "HH:mm", now=fixed_now)
        display.tick()
        display.reconfigure(formatter=classic())
        display.tick()
        assert display.text == "12:00"
        assert display.pattern == "HH:mm"


class TestFromSettings:
    """Building a display from settings and a registry."""

    def test_from_settings(self) -> None:
        """Settings select variant, pattern and configuration."""
        registry = FormatterRegistry(entry_point_group=None)
        asyncio.run(registry.load())
        settings = DisplaySettings(
            formatter="02_original",
            pattern="yyyy-MM-dd HH:mm",
            use_default_timezone=False,
            custom_timezone="+02:00",
            use_default_locale=False,
            custom_locale="en-US",
        )
        display = ClockDisplay.from_settings(settings, registry, now=fixed_now)
        display.tick()
        assert display.text == "2023-04-07 14:00"
        assert isinstance(display.formatter, ClassicFormatter)

    def test_update_loop(self) -> None:
        """update_loop() ticks at the settings' cadence."""
        display = ClockDisplay(BeatsFormatter(), "@bbb", now=fixed_now)
        loop = display.update_loop(DisplaySettings(update_level=4))
        assert loop.rate.interval_ms == 250


class TestMarkup:
    """Help-table markup."""

    def test_pad_sizes(self) -> None:
        """Widest cell per column."""
        assert pad_sizes([("y", "year", "2023"), ("MMMM", "month", "April")]) == [4, 5, 5]
        assert pad_sizes([]) == []

    def test_help_table(self) -> None:
        """Tokens and descriptions left-aligned, examples right-aligned."""
        table = help_table([("y", "year", "2023"), ("MMMM", "month", "April")])
        assert table == (
            "\n\n"
            "<tt><b>y   </b></tt> | <tt>year </tt> | <tt><i> 2023</i></tt>\n"
            "<tt><b>MMMM</b></tt> | <tt>month</tt> | <tt><i>April</i></tt>\n"
        )

    def test_help_table_escapes(self) -> None:
        """Markup characters are escaped after padding."""
        table = help_table([("<b>", "a & b", "")])
        assert "<tt><b>&lt;b&gt;</b></tt>" in table
        assert "<tt>a &amp; b</tt>" in table

    def test_help_table_translates(self) -> None:
        """Descriptions and examples go through translate."""
        table = help_table([("y", "year", "")], translate=str.upper)
        assert "<tt>YEAR</tt>" in table

    def test_empty_table(self) -> None:
        """No rows renders just the leading blank line."""
        assert help_table([]) == "\n\n"

    def test_link(self) -> None:
        """Links escape their target; no target renders nothing."""
        assert link("", "Docs") == ""
        assert link("https://a.example/?b=1&c", "Docs") == (
            '<a href="https://a.example/?b=1&amp;c">Docs</a>'
        )

    def test_bold(self) -> None:
        """bold() wraps the translated label."""
        assert bold("Beats", translate=str.lower) == "<b>beats</b>"
