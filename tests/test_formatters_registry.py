"""Tests for the formatter contract and FormatterRegistry.

Registry loading is asynchronous; tests drive it with asyncio.run().
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import pytest

from datemenu.diagnostics import DiagnosticCode, DiscoveryError, FormatterNotFoundError
from datemenu.formatters import (
    BUILTIN_FORMATTERS,
    BaseFormatter,
    FormatterHelp,
    FormatterRegistry,
    VariantDescriptor,
    create_formatter_base,
    expand_newlines,
)
from datemenu.formatters import registry as registry_module


class UpperFormatter(create_formatter_base("Upper", "Upper-cases the pattern", custom_locale=True)):
    """Test variant."""

    def format(self, pattern: str, instant: datetime) -> str:
        return pattern.upper()


class RecordingFormatter(create_formatter_base("Recording")):
    """Test variant remembering its configuration."""

    def configure(self, timezone: str | None, locale: str | None, calendar: str | None) -> None:
        self.configured = (timezone, locale, calendar)

    def format(self, pattern: str, instant: datetime) -> str:
        return pattern


@dataclass
class FakeEntryPoint:
    """Stand-in for importlib.metadata.EntryPoint."""

    name: str
    target: object

    def load(self) -> object:
        if isinstance(self.target, Exception):
            raise self.target
        return self.target


def loaded(registry: FormatterRegistry) -> FormatterRegistry:
    asyncio.run(registry.load())
    return registry


class TestFormatterContract:
    """BaseFormatter and create_formatter_base."""

    def test_metadata(self) -> None:
        """create_formatter_base sets label, description and capabilities."""
        assert UpperFormatter.label == "Upper"
        assert UpperFormatter.description == "Upper-cases the pattern"
        assert UpperFormatter.capabilities.custom_locale
        assert not UpperFormatter.capabilities.custom_timezone

    def test_configure_called_on_init(self) -> None:
        """The constructor hands its arguments to configure()."""
        formatter = RecordingFormatter("UTC", "en-US", None)
        assert formatter.configured == ("UTC", "en-US", None)

    def test_abstract(self) -> None:
        """BaseFormatter itself cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseFormatter()  # type: ignore[abstract]

    def test_repr(self) -> None:
        """repr names class and label."""
        assert repr(UpperFormatter()) == "UpperFormatter(label='Upper')"

    def test_help_normalization(self) -> None:
        """Non-string links become empty; rows become HelpRows."""
        help_ = FormatterHelp(link=None, left=[("b", "Beats", "500")])  # type: ignore[arg-type]
        assert help_.link == ""
        assert help_.left[0].token == "b"
        assert help_.right == ()

    def test_expand_newlines(self) -> None:
        r"""Only the two-character \n escape is expanded."""
        assert expand_newlines("a\\nb") == "a\nb"
        assert expand_newlines("a\nb") == "a\nb"


class TestLoading:
    """load() and discovery sources."""

    def test_builtins(self) -> None:
        """The three built-in variants load in key order."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        assert [entry.key for entry in registry.as_list()] == list(BUILTIN_FORMATTERS)
        assert registry.loaded
        assert len(registry) == 3

    def test_listing_metadata(self) -> None:
        """as_list() carries labels and descriptions."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        listing = {entry.key: entry for entry in registry.as_list()}
        assert listing["03_swatch"].label == "Swatch Beats"
        assert listing["02_original"].label == "SimpleDateFormat"

    def test_query_before_load(self) -> None:
        """Queries before load() raise DiscoveryError."""
        registry = FormatterRegistry(entry_point_group=None)
        with pytest.raises(DiscoveryError) as exc_info:
            registry.as_list()
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.REGISTRY_NOT_LOADED
        assert "02_original" not in registry

    def test_broken_builtin_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """A builtin that fails to import is logged and skipped."""
        builtins = {**BUILTIN_FORMATTERS, "99_broken": "datemenu.no_such_module:Nothing"}
        with caplog.at_level(logging.WARNING, logger="datemenu.formatters.registry"):
            registry = loaded(FormatterRegistry(builtins, entry_point_group=None))
        assert "99_broken" not in registry
        assert "Skipping formatter 99_broken" in caplog.text

    def test_builtin_raising_at_import_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Any exception from one builtin leaves the others loadable."""
        real_import = registry_module._import_object

        def import_object(target: str) -> object:
            if target.startswith("broken"):
                msg = "broken at import"
                raise RuntimeError(msg)
            return real_import(target)

        monkeypatch.setattr(registry_module, "_import_object", import_object)
        builtins = {"03_swatch": BUILTIN_FORMATTERS["03_swatch"], "98_broken": "broken:Nothing"}
        registry = loaded(FormatterRegistry(builtins, entry_point_group=None))
        assert [entry.key for entry in registry.as_list()] == ["03_swatch"]

    def test_nothing_loadable(self) -> None:
        """An empty result is a DiscoveryError."""
        builtins = {"x": "datemenu.no_such_module:Nothing"}
        registry = FormatterRegistry(builtins, entry_point_group=None)
        with pytest.raises(DiscoveryError) as exc_info:
            asyncio.run(registry.load())
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DISCOVERY_FAILED

    def test_plugins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Entry points add variants; bad ones are skipped."""
        plugins = [
            FakeEntryPoint("10_upper", UpperFormatter),
            FakeEntryPoint("11_broken", ImportError("missing")),
            FakeEntryPoint("13_raising", RuntimeError("broken at import")),
            FakeEntryPoint("14_syntax", SyntaxError("invalid syntax")),
            FakeEntryPoint("12_not_a_formatter", object),
            FakeEntryPoint("02_original", UpperFormatter),
        ]
        monkeypatch.setattr(registry_module, "entry_points", lambda group: plugins)
        registry = loaded(FormatterRegistry())
        assert registry.get_formatter("10_upper") is UpperFormatter
        assert "11_broken" not in registry
        assert "12_not_a_formatter" not in registry
        assert "13_raising" not in registry
        assert "14_syntax" not in registry
        assert registry.get_formatter("02_original").label == "SimpleDateFormat"


class TestRegistration:
    """register()."""

    def test_register_before_load(self) -> None:
        """Explicit registrations are kept by load()."""
        registry = FormatterRegistry(entry_point_group=None)
        registry.register("10_upper", UpperFormatter)
        loaded(registry)
        assert registry.get_formatter("10_upper") is UpperFormatter

    def test_register_after_load(self) -> None:
        """Registration after load() is visible immediately."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        registry.register("10_upper", UpperFormatter)
        assert "10_upper" in registry

    def test_explicit_overrides_builtin(self, caplog: pytest.LogCaptureFixture) -> None:
        """An explicit registration replaces a discovered variant."""
        registry = FormatterRegistry(entry_point_group=None)
        registry.register("03_swatch", UpperFormatter)
        with caplog.at_level(logging.WARNING, logger="datemenu.formatters.registry"):
            loaded(registry)
        assert registry.get_formatter("03_swatch") is UpperFormatter
        assert "replaces discovered one" in caplog.text

    def test_duplicate(self) -> None:
        """Registering a key twice raises."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        with pytest.raises(DiscoveryError) as exc_info:
            registry.register("01_luxon", UpperFormatter)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.FORMATTER_DUPLICATE

    def test_not_a_formatter(self) -> None:
        """Only BaseFormatter subclasses can be registered."""
        registry = FormatterRegistry(entry_point_group=None)
        with pytest.raises(TypeError, match="BaseFormatter subclass"):
            registry.register("x", str)  # type: ignore[arg-type]

    def test_hidden_keys(self) -> None:
        """Keys starting with _ are usable but not listed."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        registry.register("_upper", UpperFormatter)
        assert "_upper" not in [entry.key for entry in registry.as_list()]
        assert registry.get_formatter("_upper") is UpperFormatter


class TestQueries:
    """Lookup and metadata queries."""

    def test_get_formatter_unknown(self) -> None:
        """Unknown keys raise FormatterNotFoundError, a KeyError."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        with pytest.raises(KeyError):
            registry.get_formatter("99_nope")
        with pytest.raises(FormatterNotFoundError) as exc_info:
            registry.get_formatter("99_nope")
        assert "Formatter '99_nope' is not registered" in str(exc_info.value)

    def test_help(self) -> None:
        """get_formatter_help() returns the variant's tables."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        help_ = registry.get_formatter_help("03_swatch")
        assert help_.link == ""
        assert help_.left[0].token == "b"
        assert help_.right[0].token == "s"

    def test_describe(self) -> None:
        """describe() bundles all static metadata."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        descriptor = registry.describe("01_luxon")
        assert isinstance(descriptor, VariantDescriptor)
        assert descriptor.key == "01_luxon"
        assert descriptor.capabilities.custom_calendar
        assert descriptor.help.link.startswith("https://")

    def test_iteration_and_repr(self) -> None:
        """Iteration yields sorted keys."""
        registry = FormatterRegistry(entry_point_group=None)
        assert repr(registry) == "FormatterRegistry(not loaded)"
        loaded(registry)
        assert list(registry) == sorted(BUILTIN_FORMATTERS)
        assert repr(registry) == "FormatterRegistry(3 formatters)"

    def test_instantiate_and_format(self) -> None:
        """A looked-up class renders once instantiated."""
        registry = loaded(FormatterRegistry(entry_point_group=None))
        formatter = registry.get_formatter("02_original")("UTC", "en-US")
        assert formatter.format("yyyy", datetime(2023, 4, 7, tzinfo=UTC)) == "2023"
