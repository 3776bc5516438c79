"""Format compiler for classic date patterns.

DatePatternFormatter turns a pattern string into one composed renderer and
memoizes the result. It is bound to one locale and time zone; changing either
means building a new instance.

Pattern dialects:
    "#yyyy-MM-dd"  explicit field letters after the "#" marker
    "yMMMd"        auto-format request: fields only, layout from the locale

Architecture:
    - tokenize() splits explicit patterns into literals and field runs
    - FieldResolver maps each run to a renderer (cached per specifier)
    - The composed renderer is cached per pattern, None results included
    - DatePatternFormatter.get() shares instances per (locale, timezone)

Python 3.13+. Uses Babel for locale data.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import datetime, tzinfo
from threading import RLock
from typing import TYPE_CHECKING, ClassVar

from datemenu.constants import MAX_SHARED_FORMATTERS, PATTERN_MARKER, SUNDAY
from datemenu.diagnostics import ErrorTemplate, FormattingError
from datemenu.locale_utils import resolve_locale, resolve_timezone, timezone_name
from datemenu.pattern.fields import FieldResolver
from datemenu.pattern.skeleton import build_skeleton, match_locale_pattern
from datemenu.pattern.tokenizer import FieldRun, Literal, tokenize
from datemenu.runtime.cache import RendererCache

if TYPE_CHECKING:
    from babel import Locale

    from datemenu.runtime.cache import Renderer

__all__ = ["DatePatternFormatter"]

logger = logging.getLogger(__name__)


def _empty(instant: datetime) -> str:
    return ""


def _constant(text: str) -> Renderer:
    return lambda instant: text


class DatePatternFormatter:
    """Compile and render classic date patterns for one locale and time zone.

    Example:
        >>> from datetime import UTC, datetime
        >>> fmt = DatePatternFormatter.get("en-US", "UTC")
        >>> fmt.format("#yyyy-MM-dd", datetime(2023, 4, 7, tzinfo=UTC))
        '2023-04-07'
    """

    # Shared instances keyed by (locale, timezone) setting; LRU bounded
    _shared: ClassVar[OrderedDict[tuple[str, str], DatePatternFormatter]] = OrderedDict()
    _shared_lock: ClassVar[RLock] = RLock()

    __slots__ = ("_cache", "_resolver")

    def __init__(self, locale: Locale, tz: tzinfo, *, first_weekday: int = SUNDAY) -> None:
        """Initialize formatter.

        Args:
            locale: Babel locale for names and skeleton matching
            tz: Time zone instants are rendered in
            first_weekday: First day of week for week of year (Monday == 0)
        """
        self._resolver = FieldResolver(locale, tz, first_weekday=first_weekday)
        self._cache = RendererCache()

    @classmethod
    def get(cls, locale: str | None = None, timezone: str | None = None) -> DatePatternFormatter:
        """Get a shared formatter for a locale and time zone setting.

        None selects the system default for either argument.

        Raises:
            ConfigurationError: If the locale or time zone is unknown
        """
        key = (locale or "default", timezone or "default")
        with cls._shared_lock:
            if key in cls._shared:
                cls._shared.move_to_end(key)
                return cls._shared[key]

            formatter = cls(resolve_locale(locale), resolve_timezone(timezone))
            cls._shared[key] = formatter
            if len(cls._shared) > MAX_SHARED_FORMATTERS:
                cls._shared.popitem(last=False)
            logger.debug("Created shared formatter for %s/%s", *key)
            return formatter

    @classmethod
    def clear_shared(cls) -> None:
        """Drop all shared formatter instances."""
        with cls._shared_lock:
            cls._shared.clear()

    @property
    def locale(self) -> Locale:
        """Babel locale in use."""
        return self._resolver.locale

    @property
    def timezone(self) -> tzinfo:
        """Time zone in use."""
        return self._resolver.timezone

    def format(self, pattern: str, instant: datetime) -> str:
        """Render a pattern for an instant.

        Args:
            pattern: Explicit ("#...") or auto-format pattern
            instant: Point in time; naive values are taken as system local time

        Returns:
            Rendered text

        Raises:
            FormattingError: If the pattern has no renderer or rendering fails
        """
        renderer = self.get_renderer(pattern)
        if renderer is None:
            skeleton = None
            if not pattern.startswith(PATTERN_MARKER):
                skeleton = build_skeleton(pattern, self.locale)
            raise FormattingError(
                ErrorTemplate.no_renderer(pattern, str(self.locale), skeleton=skeleton)
            )
        try:
            return renderer(instant)
        except (ValueError, OverflowError, AttributeError, KeyError, TypeError) as e:
            diagnostic = ErrorTemplate.formatting_failed(
                pattern,
                str(e),
                locale_code=str(self.locale),
                timezone=timezone_name(self.timezone),
            )
            raise FormattingError(diagnostic) from e

    def get_renderer(self, pattern: str) -> Renderer | None:
        """Get the (cached) renderer for a pattern.

        Returns:
            Renderer, or None when an auto-format pattern matches no locale
            format
        """
        return self._cache.get_or_compile_pattern(pattern, self._compile)

    def cache_stats(self) -> dict[str, int]:
        """Renderer cache statistics, see RendererCache.stats()."""
        return self._cache.stats()

    def _compile(self, pattern: str) -> Renderer | None:
        logger.debug("Compiling pattern %r", pattern)
        if pattern.startswith(PATTERN_MARKER):
            return self._compile_explicit(pattern[len(PATTERN_MARKER) :])
        return self._compile_auto(pattern)

    def _compile_explicit(self, pattern: str) -> Renderer:
        parts: list[Renderer] = []
        for segment in tokenize(pattern):
            match segment:
                case Literal(text=text):
                    parts.append(_constant(text))
                case FieldRun():
                    renderer = self._cache.get_or_compile_field(
                        segment.specifier, self._resolve_specifier
                    )
                    if renderer is not None:
                        parts.append(renderer)

        if not parts:
            return _empty
        if len(parts) == 1:
            return parts[0]
        renderers = tuple(parts)
        return lambda instant: "".join(part(instant) for part in renderers)

    def _resolve_specifier(self, specifier: str) -> Renderer | None:
        return self._resolver.resolve(specifier[0], len(specifier))

    def _compile_auto(self, pattern: str) -> Renderer | None:
        locale = self.locale
        skeleton = build_skeleton(pattern, locale)
        locale_pattern = match_locale_pattern(skeleton, locale)
        if locale_pattern is None:
            logger.debug("No locale format for skeleton %r (%s)", skeleton, locale)
            return None
        localize = self._resolver.localize
        return lambda instant: str(locale_pattern.apply(localize(instant), locale))
