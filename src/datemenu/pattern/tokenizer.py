"""Date pattern tokenizer.

Splits a CLDR-style date pattern into literal text and field-letter runs.
The tokenizer never fails: unknown letters are still returned as runs and
left to the resolver, and an unterminated quote turns the rest of the
pattern into literal text.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from string import ascii_letters
from typing import TypeAlias

from datemenu.constants import AUTO_FORMAT_LETTERS, DEPRECATED_LETTERS, QUOTE

__all__ = ["FieldRun", "Literal", "Segment", "tokenize"]

_LETTERS = frozenset(ascii_letters)


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal text emitted verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class FieldRun:
    """Maximal run of one repeated field letter.

    Attributes:
        letter: The field letter, e.g. "y"
        length: Number of repetitions (>= 1)
    """

    letter: str
    length: int

    @property
    def specifier(self) -> str:
        """The run as it appeared in the pattern, e.g. "yyyy"."""
        return self.letter * self.length


Segment: TypeAlias = Literal | FieldRun


def tokenize(pattern: str, *, keep_auto_letters: bool = False) -> tuple[Segment, ...]:
    """Tokenize a date pattern into literal and field segments.

    Quoting follows CLDR rules:
    - Single quotes delimit literal text: 'at' produces "at"
    - Two consecutive single quotes '' produce one literal single quote,
      inside or outside a quoted section

    Runs of the deprecated letter "l" are dropped. Runs of the hour-preference
    letters "j", "J" and "C" are dropped as well unless keep_auto_letters is
    set (they only make sense when matching locale skeletons).

    Adjacent literal text is merged into a single Literal.

    Examples:
        "HH:mm" -> (FieldRun("H", 2), Literal(":"), FieldRun("m", 2))
        "h 'o''clock'" -> (FieldRun("h", 1), Literal(" o'clock"))

    Args:
        pattern: Pattern string without the explicit-pattern marker
        keep_auto_letters: Keep j/J/C runs instead of dropping them

    Returns:
        Tuple of segments in pattern order
    """
    segments: list[Segment] = []
    literal_chars: list[str] = []
    i = 0
    n = len(pattern)

    def flush_literal() -> None:
        if literal_chars:
            segments.append(Literal("".join(literal_chars)))
            literal_chars.clear()

    while i < n:
        char = pattern[i]

        if char == QUOTE:
            # '' outside quoted section -> literal single quote
            if i + 1 < n and pattern[i + 1] == QUOTE:
                literal_chars.append(QUOTE)
                i += 2
                continue

            i += 1  # Skip opening quote
            while i < n:
                if pattern[i] == QUOTE:
                    if i + 1 < n and pattern[i + 1] == QUOTE:
                        literal_chars.append(QUOTE)
                        i += 2
                    else:
                        i += 1  # Closing quote
                        break
                else:
                    literal_chars.append(pattern[i])
                    i += 1
            continue

        if char in _LETTERS:
            j = i + 1
            while j < n and pattern[j] == char:
                j += 1
            length = j - i
            i = j
            if char in DEPRECATED_LETTERS:
                continue
            if char in AUTO_FORMAT_LETTERS and not keep_auto_letters:
                continue
            flush_literal()
            segments.append(FieldRun(char, length))
            continue

        literal_chars.append(char)
        i += 1

    flush_literal()
    return tuple(segments)
