"""Pango markup for the preferences help tables.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterable, Sequence
from html import escape
from typing import TypeAlias

__all__ = ["bold", "help_table", "link", "pad_sizes"]

Translate: TypeAlias = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def pad_sizes(rows: Iterable[Sequence[str]]) -> list[int]:
    """Widest cell per column.

    Example:
        >>> pad_sizes([("y", "year", "2023"), ("MMMM", "month", "April")])
        [4, 5, 5]
    """
    sizes: list[int] = []
    for row in rows:
        for index, cell in enumerate(row):
            if index == len(sizes):
                sizes.append(0)
            sizes[index] = max(sizes[index], len(cell))
    return sizes


def _row(token: str, description: str, example: str) -> str:
    return (
        f"<tt><b>{escape(token, quote=False)}</b></tt> | "
        f"<tt>{escape(description, quote=False)}</tt> | "
        f"<tt><i>{escape(example, quote=False)}</i></tt>\n"
    )


def help_table(rows: Sequence[Sequence[str]], translate: Translate = _identity) -> str:
    """Render help rows as monospace columns.

    Tokens and descriptions are left-aligned, examples right-aligned. The
    table starts with a blank line so it can follow a heading directly.

    Args:
        rows: (token, description, example) rows
        translate: Lookup for description and example texts
    """
    translated = [(token, translate(desc), translate(ex)) for token, desc, ex in rows]
    sizes = pad_sizes(translated) or [0, 0, 0]
    token_pad, description_pad, example_pad = sizes
    lines = [
        _row(token.ljust(token_pad), desc.ljust(description_pad), ex.rjust(example_pad))
        for token, desc, ex in translated
    ]
    return "\n\n" + "".join(lines)


def link(ref: str, label: str, translate: Translate = _identity) -> str:
    """Hyperlink markup, or "" when there is no target."""
    if not ref:
        return ""
    return f'<a href="{escape(ref)}">{escape(translate(label), quote=False)}</a>'


def bold(label: str, translate: Translate = _identity) -> str:
    """Bold markup."""
    return f"<b>{escape(translate(label), quote=False)}</b>"
