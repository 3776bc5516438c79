"""Persisted display settings.

DisplaySettings mirrors the key/value settings store of the panel widget.
It is rebuilt from the store on every change notification and turned into
a FormatterConfiguration for the selected variant.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import TYPE_CHECKING

from datemenu.constants import MAX_UPDATE_LEVEL, MIN_UPDATE_LEVEL
from datemenu.diagnostics import ConfigurationError, ErrorTemplate
from datemenu.display.schedule import UpdateRate, update_level
from datemenu.runtime.config import FormatterConfiguration

if TYPE_CHECKING:
    from datemenu.formatters.base import FormatterCapabilities

__all__ = ["DisplaySettings", "SettingKey", "TextAlign"]


class TextAlign(StrEnum):
    """Horizontal alignment of the clock label."""

    START = "start"
    CENTER = "center"
    END = "end"

    @property
    def css(self) -> str:
        """CSS text-align value."""
        return _CSS_ALIGN[self]


_CSS_ALIGN = {
    TextAlign.START: "left",
    TextAlign.CENTER: "center",
    TextAlign.END: "right",
}


class SettingKey(StrEnum):
    """Keys of the settings store."""

    FORMATTER = "formatter"
    PATTERN = "pattern"
    UPDATE_LEVEL = "update-level"
    USE_DEFAULT_LOCALE = "use-default-locale"
    CUSTOM_LOCALE = "custom-locale"
    USE_DEFAULT_CALENDAR = "use-default-calendar"
    CUSTOM_CALENDAR = "custom-calendar"
    USE_DEFAULT_TIMEZONE = "use-default-timezone"
    CUSTOM_TIMEZONE = "custom-timezone"
    FONT_SIZE = "font-size"
    TEXT_ALIGN = "text-align"
    APPLY_ALL_PANELS = "apply-all-panels"
    REMOVE_MESSAGES_INDICATOR = "remove-messages-indicator"


@dataclass(frozen=True, slots=True)
class DisplaySettings:
    """Snapshot of the persisted configuration.

    Attributes:
        formatter: Registry key of the selected variant
        pattern: Pattern string in the variant's own dialect
        update_level: 0 for once a minute, 1-15 for N updates per second
        use_default_locale: Ignore custom_locale
        custom_locale: BCP-47 tag
        use_default_timezone: Ignore custom_timezone
        custom_timezone: IANA zone name or offset
        use_default_calendar: Ignore custom_calendar
        custom_calendar: Calendar identifier
        font_size: Label font size in points
        text_align: Label alignment
        apply_all_panels: Replace the clock on every panel
        remove_messages_indicator: Hide the unread-messages dot
    """

    formatter: str = "02_original"
    pattern: str = "EEE, MMM d  HH:mm"
    update_level: int = 1
    use_default_locale: bool = True
    custom_locale: str = ""
    use_default_timezone: bool = True
    custom_timezone: str = ""
    use_default_calendar: bool = True
    custom_calendar: str = ""
    font_size: int = 9
    text_align: TextAlign = TextAlign.CENTER
    apply_all_panels: bool = False
    remove_messages_indicator: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> DisplaySettings:
        """Build settings from store values keyed by SettingKey.

        Missing keys keep their defaults; unknown keys are ignored.

        Raises:
            ConfigurationError: If a value has the wrong type or range
        """
        defaults = cls()
        kwargs: dict[str, object] = {}
        for field in fields(cls):
            key = field.name.replace("_", "-")
            if key not in values:
                continue
            kwargs[field.name] = _coerce(key, values[key], getattr(defaults, field.name))
        return cls(**kwargs)  # type: ignore[arg-type]

    def to_mapping(self) -> dict[str, object]:
        """Store values keyed by SettingKey."""
        values: dict[str, object] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            values[field.name.replace("_", "-")] = str(value) if isinstance(value, TextAlign) else value
        return values

    @property
    def update_rate(self) -> UpdateRate:
        """Tick cadence for update_level."""
        return update_level(self.update_level)

    def formatter_configuration(
        self, capabilities: FormatterCapabilities | None = None
    ) -> FormatterConfiguration:
        """Configuration for the selected variant.

        Custom values are used only when their use-default toggle is off and,
        when capabilities are given, the variant honours the override.
        """
        def pick(use_default: bool, value: str, supported: bool) -> str | None:
            return None if use_default or not supported else value

        return FormatterConfiguration(
            timezone=pick(
                self.use_default_timezone,
                self.custom_timezone,
                capabilities is None or capabilities.custom_timezone,
            ),
            locale=pick(
                self.use_default_locale,
                self.custom_locale,
                capabilities is None or capabilities.custom_locale,
            ),
            calendar=pick(
                self.use_default_calendar,
                self.custom_calendar,
                capabilities is None or capabilities.custom_calendar,
            ),
        )

    def style(self) -> str:
        """Inline style of the clock label."""
        return f"font-size: {self.font_size}pt; text-align: {self.text_align.css}"


def _coerce(key: str, value: object, default: object) -> object:
    if isinstance(default, TextAlign):
        try:
            return TextAlign(str(value))
        except ValueError as e:
            raise ConfigurationError(
                ErrorTemplate.setting_invalid(key, value, "expected start, center or end")
            ) from e
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigurationError(ErrorTemplate.setting_invalid(key, value, "expected a boolean"))
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(ErrorTemplate.setting_invalid(key, value, "expected an integer"))
        if key == SettingKey.UPDATE_LEVEL and not MIN_UPDATE_LEVEL <= value <= MAX_UPDATE_LEVEL:
            raise ConfigurationError(
                ErrorTemplate.setting_invalid(key, value, "expected a level from 0 to 15")
            )
        return value
    if not isinstance(value, str):
        raise ConfigurationError(ErrorTemplate.setting_invalid(key, value, "expected a string"))
    return value
