"""Formatter registry: load variants, expose their metadata.

Variants come from three sources, in order:
    1. BUILTIN_FORMATTERS, a static key -> "module:Class" table
    2. Explicit FormatterRegistry.register() calls
    3. Installed plugins exposing entry points in group "datemenu.formatters"
       (entry point name is the key, the object is the formatter class)

Loading is a one-shot asynchronous operation. Query methods raise
DiscoveryError until load() has completed.

Example:
    >>> import asyncio
    >>> registry = FormatterRegistry()
    >>> asyncio.run(registry.load())
    >>> [entry.key for entry in registry.as_list()]
    ['01_luxon', '02_original', '03_swatch']

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from datemenu.diagnostics import DiscoveryError, ErrorTemplate, FormatterNotFoundError
from datemenu.formatters.base import BaseFormatter, FormatterCapabilities, FormatterHelp

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

__all__ = [
    "BUILTIN_FORMATTERS",
    "ENTRY_POINT_GROUP",
    "FormatterListing",
    "FormatterRegistry",
    "VariantDescriptor",
]

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "datemenu.formatters"

# Keys are persisted in user settings; never rename them.
BUILTIN_FORMATTERS: dict[str, str] = {
    "01_luxon": "datemenu.formatters.tokens:TokenFormatter",
    "02_original": "datemenu.formatters.classic:ClassicFormatter",
    "03_swatch": "datemenu.formatters.beats:BeatsFormatter",
}

_HIDDEN_PREFIX = "_"


@dataclass(frozen=True, slots=True)
class FormatterListing:
    """Entry of FormatterRegistry.as_list()."""

    key: str
    label: str
    description: str


@dataclass(frozen=True, slots=True)
class VariantDescriptor:
    """Complete static metadata of one formatter variant.

    Attributes:
        key: Registry key (persisted in settings)
        label: Display name
        description: One-line description
        capabilities: Honoured configuration overrides
        help: Pattern vocabulary tables
    """

    key: str
    label: str
    description: str
    capabilities: FormatterCapabilities
    help: FormatterHelp

    @classmethod
    def from_class(cls, key: str, formatter: type[BaseFormatter]) -> VariantDescriptor:
        """Build a descriptor from a formatter class's metadata."""
        return cls(
            key=key,
            label=formatter.label,
            description=formatter.description,
            capabilities=formatter.capabilities,
            help=formatter.help,
        )


def _import_object(target: str) -> object:
    module_name, _, attribute = target.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attribute)


def _check_formatter(key: str, obj: object) -> type[BaseFormatter]:
    if not (isinstance(obj, type) and issubclass(obj, BaseFormatter)):
        msg = f"Formatter '{key}' must be a BaseFormatter subclass, got {obj!r}"
        raise TypeError(msg)
    return obj


class FormatterRegistry:
    """Registry of formatter variants.

    Not thread-safe: populate and load from one event loop, then treat as
    read-only.
    """

    __slots__ = ("_builtins", "_entry_point_group", "_explicit", "_formatters", "_loaded")

    def __init__(
        self,
        builtins: Mapping[str, str] | None = None,
        *,
        entry_point_group: str | None = ENTRY_POINT_GROUP,
    ) -> None:
        """Initialize an empty, unloaded registry.

        Args:
            builtins: Static key -> "module:Class" table (default BUILTIN_FORMATTERS)
            entry_point_group: Plugin entry point group, None to disable plugins
        """
        self._builtins = dict(BUILTIN_FORMATTERS if builtins is None else builtins)
        self._entry_point_group = entry_point_group
        self._explicit: dict[str, type[BaseFormatter]] = {}
        self._formatters: dict[str, type[BaseFormatter]] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        """True once load() has completed."""
        return self._loaded

    def register(self, key: str, formatter: type[BaseFormatter]) -> None:
        """Register a formatter class under a key.

        Allowed before and after load(). Keys starting with "_" are
        registered but hidden from as_list().

        Raises:
            DiscoveryError: If the key is already registered
            TypeError: If formatter is not a BaseFormatter subclass
        """
        _check_formatter(key, formatter)
        if key in self._explicit or key in self._formatters:
            raise DiscoveryError(ErrorTemplate.formatter_duplicate(key))
        self._explicit[key] = formatter
        if self._loaded:
            self._formatters[key] = formatter
        logger.debug("Registered formatter %s (%s)", key, formatter.__name__)

    async def load(self) -> None:
        """Resolve all variants.

        Module imports run in a worker thread so the caller's event loop keeps
        running. A variant that fails to load is logged and skipped.

        Raises:
            DiscoveryError: If no variant could be loaded at all
        """
        try:
            discovered = await asyncio.to_thread(self._discover)
        except Exception as e:
            logger.error("Formatter discovery failed: %s", e)
            raise DiscoveryError(ErrorTemplate.discovery_failed(str(e))) from e

        for key, formatter in self._explicit.items():
            if key in discovered:
                logger.warning("Formatter %s registered explicitly replaces discovered one", key)
            discovered[key] = formatter

        if not discovered:
            logger.error("No formatter could be loaded")
            raise DiscoveryError(ErrorTemplate.discovery_failed("no formatter could be loaded"))

        self._formatters = discovered
        self._loaded = True
        logger.info("Loaded %d formatters", len(discovered))

    def _discover(self) -> dict[str, type[BaseFormatter]]:
        found: dict[str, type[BaseFormatter]] = {}
        for key, target in self._builtins.items():
            try:
                found[key] = _check_formatter(key, _import_object(target))
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.warning("Skipping formatter %s: %s", key, e)

        if self._entry_point_group is None:
            return found

        for entry_point in entry_points(group=self._entry_point_group):
            if entry_point.name in found:
                logger.warning("Skipping plugin %s: key already in use", entry_point.name)
                continue
            try:
                found[entry_point.name] = _check_formatter(entry_point.name, entry_point.load())
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.warning("Skipping plugin %s: %s", entry_point.name, e)
        return found

    def _require_loaded(self) -> dict[str, type[BaseFormatter]]:
        if not self._loaded:
            raise DiscoveryError(ErrorTemplate.registry_not_loaded())
        return self._formatters

    def as_list(self) -> list[FormatterListing]:
        """Visible variants sorted by key.

        Raises:
            DiscoveryError: If called before load()
        """
        formatters = self._require_loaded()
        return [
            FormatterListing(key, formatters[key].label, formatters[key].description)
            for key in sorted(formatters)
            if not key.startswith(_HIDDEN_PREFIX)
        ]

    def get_formatter(self, key: str) -> type[BaseFormatter]:
        """Formatter class registered under key.

        Raises:
            DiscoveryError: If called before load()
            FormatterNotFoundError: If key is unknown
        """
        formatters = self._require_loaded()
        formatter = formatters.get(key)
        if formatter is None:
            raise FormatterNotFoundError(ErrorTemplate.formatter_not_found(key))
        return formatter

    def get_formatter_help(self, key: str) -> FormatterHelp:
        """Help tables of the variant registered under key.

        Raises:
            DiscoveryError: If called before load()
            FormatterNotFoundError: If key is unknown
        """
        return self.get_formatter(key).help

    def describe(self, key: str) -> VariantDescriptor:
        """Complete metadata of the variant registered under key.

        Raises:
            DiscoveryError: If called before load()
            FormatterNotFoundError: If key is unknown
        """
        return VariantDescriptor.from_class(key, self.get_formatter(key))

    def __contains__(self, key: object) -> bool:
        return self._loaded and key in self._formatters

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._require_loaded()))

    def __len__(self) -> int:
        return len(self._formatters)

    def __repr__(self) -> str:
        state = f"{len(self._formatters)} formatters" if self._loaded else "not loaded"
        return f"FormatterRegistry({state})"
