"""Shared constants for datemenu.

Centralized configuration constants used across the pattern engine,
formatter variants and display glue. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Pattern syntax: marker and quote characters, skipped letters
- Cache limits: guard on shared formatter instances
- Configuration sentinels: values meaning "use the system default"
- Update rate: bounds of the persisted update level
- Fallback strings: text shown when nothing could be rendered

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Pattern syntax
    "PATTERN_MARKER",
    "QUOTE",
    "DEPRECATED_LETTERS",
    "AUTO_FORMAT_LETTERS",
    "ESCAPED_NEWLINE",
    # Cache limits
    "MAX_SHARED_FORMATTERS",
    # Configuration sentinels
    "DEFAULT_SENTINELS",
    "GREGORIAN_CALENDARS",
    "SUNDAY",
    # Update rate
    "MIN_UPDATE_LEVEL",
    "MAX_UPDATE_LEVEL",
    "MINUTE_INTERVAL_MS",
    "SECOND_INTERVAL_MS",
    # Fallback strings
    "FALLBACK_TEXT",
]

# ============================================================================
# PATTERN SYNTAX
# ============================================================================

# Leading character selecting explicit field-letter syntax. Patterns without
# it are auto-format requests resolved through the locale's skeletons.
PATTERN_MARKER: str = "#"

QUOTE: str = "'"

# "l" is a deprecated CLDR field and renders nothing.
DEPRECATED_LETTERS: frozenset[str] = frozenset("l")

# Hour-preference letters only meaningful when matching skeletons.
AUTO_FORMAT_LETTERS: frozenset[str] = frozenset("jJC")

# Settings store patterns on one line; the two-character "\n" means newline.
ESCAPED_NEWLINE: str = "\\n"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum shared DatePatternFormatter instances (one per locale/zone pair).
# Per-instance renderer caches are never evicted: they are bounded by the
# number of distinct patterns a user actually tries.
MAX_SHARED_FORMATTERS: int = 64

# ============================================================================
# CONFIGURATION SENTINELS
# ============================================================================

# Values of a locale/timezone/calendar setting meaning "system default".
DEFAULT_SENTINELS: frozenset[str] = frozenset({"", "default", "system"})

# Calendar identifiers rendered by the Gregorian-only backends.
GREGORIAN_CALENDARS: frozenset[str] = frozenset({"gregory", "gregorian", "iso8601"})

# datetime.weekday() numbering; default first day of week for week-of-year.
SUNDAY: int = 6

# ============================================================================
# UPDATE RATE
# ============================================================================

# 0 means once per minute, 1-15 means N updates per second.
MIN_UPDATE_LEVEL: int = 0
MAX_UPDATE_LEVEL: int = 15
MINUTE_INTERVAL_MS: float = 60_000.0
SECOND_INTERVAL_MS: float = 1_000.0

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Shown by the display before the first successful render.
FALLBACK_TEXT: str = "..."
