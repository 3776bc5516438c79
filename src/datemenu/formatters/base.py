"""Formatter variant contract and metadata.

Every variant is a class carrying static metadata (label, description,
capability flags, help tables) and implementing configure() and format().
Instances are cheap and immutable in practice: a settings change constructs
a new instance instead of reconfiguring the running one.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, NamedTuple

from datemenu.constants import ESCAPED_NEWLINE

if TYPE_CHECKING:
    from datetime import datetime

__all__ = [
    "BaseFormatter",
    "FormatterCapabilities",
    "FormatterHelp",
    "HelpRow",
    "create_formatter_base",
    "expand_newlines",
]


@dataclass(frozen=True, slots=True)
class FormatterCapabilities:
    """Which configuration overrides a variant honours.

    Attributes:
        custom_timezone: Variant renders in a configurable time zone
        custom_locale: Variant renders names for a configurable locale
        custom_calendar: Variant accepts a calendar system identifier
    """

    custom_timezone: bool = False
    custom_locale: bool = False
    custom_calendar: bool = False


class HelpRow(NamedTuple):
    """One line of a help table. An all-empty row is a spacer."""

    token: str
    description: str
    example: str

    @property
    def is_spacer(self) -> bool:
        """True for the empty separator row."""
        return not (self.token or self.description or self.example)


def _rows(rows: Iterable[Iterable[str]] | None) -> tuple[HelpRow, ...]:
    if rows is None:
        return ()
    return tuple(HelpRow(*row) for row in rows)


@dataclass(frozen=True, slots=True)
class FormatterHelp:
    """Pattern vocabulary of a variant, shown in two columns.

    Attributes:
        link: Reference documentation URL, "" when there is none
        left: Rows of the left column
        right: Rows of the right column

    Example:
        >>> help_ = FormatterHelp(left=[("b", "Beats", "@500")])
        >>> help_.left[0].description
        'Beats'
        >>> help_.link
        ''
    """

    link: str = ""
    left: tuple[HelpRow, ...] = ()
    right: tuple[HelpRow, ...] = ()

    def __post_init__(self) -> None:
        """Normalize rows to HelpRow tuples and an invalid link to ""."""
        link = self.link if isinstance(self.link, str) else ""
        object.__setattr__(self, "link", link)
        object.__setattr__(self, "left", _rows(self.left))
        object.__setattr__(self, "right", _rows(self.right))


def expand_newlines(pattern: str) -> str:
    r"""Turn the two-character escape "\n" into a newline."""
    return pattern.replace(ESCAPED_NEWLINE, "\n")


class BaseFormatter(ABC):
    """Base class of all formatter variants.

    Subclasses usually derive from create_formatter_base() to get their
    metadata, override configure() to capture settings and implement format().
    """

    label: ClassVar[str] = ""
    description: ClassVar[str] = ""
    capabilities: ClassVar[FormatterCapabilities] = FormatterCapabilities()
    help: ClassVar[FormatterHelp] = FormatterHelp()

    def __init__(
        self,
        timezone: str | None = None,
        locale: str | None = None,
        calendar: str | None = None,
    ) -> None:
        """Create a formatter for a configuration.

        Args:
            timezone: IANA zone name or offset, None for the system zone
            locale: BCP-47 tag, None for the system locale
            calendar: Calendar identifier, None for the default calendar
        """
        self.configure(timezone, locale, calendar)

    def configure(
        self,
        timezone: str | None,
        locale: str | None,
        calendar: str | None,
    ) -> None:
        """Capture configuration. Variants ignoring configuration keep this no-op."""

    @abstractmethod
    def format(self, pattern: str, instant: datetime) -> str:
        """Render pattern for instant.

        Raises:
            FormattingError: If the pattern or configuration cannot be rendered
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(label={self.label!r})"


def create_formatter_base(
    label: str,
    description: str = "",
    *,
    custom_timezone: bool = False,
    custom_locale: bool = False,
    custom_calendar: bool = False,
) -> type[BaseFormatter]:
    """Build an abstract base class carrying variant metadata.

    Example:
        >>> class Upper(create_formatter_base("Upper", custom_locale=True)):
        ...     def format(self, pattern, instant):
        ...         return pattern.upper()
        >>> Upper.capabilities.custom_locale
        True
    """

    class CustomFormatter(BaseFormatter):
        pass

    CustomFormatter.label = label or ""
    CustomFormatter.description = description or ""
    CustomFormatter.capabilities = FormatterCapabilities(
        custom_timezone=bool(custom_timezone),
        custom_locale=bool(custom_locale),
        custom_calendar=bool(custom_calendar),
    )
    return CustomFormatter
