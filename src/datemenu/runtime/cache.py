"""Renderer caches for compiled date patterns.

Memoizes compiled renderers so a pattern is tokenized and resolved once, not
on every clock tick.

Architecture:
    - Two mappings per formatter instance: whole pattern -> renderer, and
      single field specifier (e.g. "EEEE") -> field renderer
    - None is a valid cached value meaning "nothing renderable"; lookups use
      membership, not truthiness
    - No eviction: entries are bounded by the distinct patterns a user tries,
      and reconfiguration discards the owning formatter wholesale
    - Hit/miss counters for observability

Thread Safety:
    Not synchronized. Each cache belongs to one formatter instance that is
    driven by a single cooperative update loop.

Python 3.13+.
"""

from collections.abc import Callable
from datetime import datetime
from typing import TypeAlias

__all__ = ["RendererCache", "Renderer"]

# A compiled renderer: pure function from an aware datetime to display text.
Renderer: TypeAlias = Callable[[datetime], str]

_MISSING = object()


class RendererCache:
    """Pattern and field-specifier renderer caches.

    Example:
        >>> cache = RendererCache()
        >>> cache.get_or_compile_pattern("#HH", lambda pattern: None) is None
        True
        >>> cache.stats()["pattern_misses"]
        1
    """

    __slots__ = (
        "_field_hits",
        "_field_misses",
        "_fields",
        "_pattern_hits",
        "_pattern_misses",
        "_patterns",
    )

    def __init__(self) -> None:
        """Initialize empty caches."""
        self._patterns: dict[str, Renderer | None] = {}
        self._fields: dict[str, Renderer | None] = {}
        self._pattern_hits = 0
        self._pattern_misses = 0
        self._field_hits = 0
        self._field_misses = 0

    def get_or_compile_pattern(
        self, pattern: str, compile_fn: Callable[[str], Renderer | None]
    ) -> Renderer | None:
        """Return the cached renderer for a pattern, compiling it on first use.

        Args:
            pattern: Full pattern string (including any marker)
            compile_fn: Compiler invoked on a cache miss

        Returns:
            Renderer, or None if the pattern has no renderer
        """
        cached = self._patterns.get(pattern, _MISSING)
        if cached is not _MISSING:
            self._pattern_hits += 1
            return cached  # type: ignore[return-value]
        self._pattern_misses += 1
        renderer = compile_fn(pattern)
        self._patterns[pattern] = renderer
        return renderer

    def get_or_compile_field(
        self, specifier: str, compile_fn: Callable[[str], Renderer | None]
    ) -> Renderer | None:
        """Return the cached renderer for one field specifier run.

        Args:
            specifier: A run of one repeated letter, e.g. "yyyy"
            compile_fn: Resolver invoked on a cache miss

        Returns:
            Renderer, or None if the field is unsupported
        """
        cached = self._fields.get(specifier, _MISSING)
        if cached is not _MISSING:
            self._field_hits += 1
            return cached  # type: ignore[return-value]
        self._field_misses += 1
        renderer = compile_fn(specifier)
        self._fields[specifier] = renderer
        return renderer

    def clear(self) -> None:
        """Drop all cached renderers and reset statistics."""
        self._patterns.clear()
        self._fields.clear()
        self._pattern_hits = 0
        self._pattern_misses = 0
        self._field_hits = 0
        self._field_misses = 0

    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with pattern/field entry counts, hits and misses
        """
        return {
            "patterns": len(self._patterns),
            "fields": len(self._fields),
            "pattern_hits": self._pattern_hits,
            "pattern_misses": self._pattern_misses,
            "field_hits": self._field_hits,
            "field_misses": self._field_misses,
        }

    def __contains__(self, pattern: object) -> bool:
        """Check whether a pattern has been compiled (None results included)."""
        return pattern in self._patterns

    def __len__(self) -> int:
        """Number of cached pattern renderers."""
        return len(self._patterns)
