"""Host-agnostic glue around the formatting engine.

Settings snapshot, update cadence, the live clock label state and help-table
markup. No GUI toolkit is imported here; the host binds ClockDisplay.text
to its label and drives UpdateLoop on its event loop.

Python 3.13+.
"""

from .clock import ClockDisplay
from .markup import bold, help_table, link, pad_sizes
from .schedule import Priority, UpdateLoop, UpdateRate, update_level, update_level_to_string
from .settings import DisplaySettings, SettingKey, TextAlign

__all__ = [
    "ClockDisplay",
    "DisplaySettings",
    "Priority",
    "SettingKey",
    "TextAlign",
    "UpdateLoop",
    "UpdateRate",
    "bold",
    "help_table",
    "link",
    "pad_sizes",
    "update_level",
    "update_level_to_string",
]
