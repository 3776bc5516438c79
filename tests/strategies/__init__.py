"""Hypothesis strategies for datemenu property-based testing.

Usage:
    from tests.strategies import aware_instants, literal_patterns
"""

from .patterns import (
    aware_instants,
    fixed_offsets,
    instant_by_boundary,
    literal_patterns,
    literal_text,
    padded_numeric_letters,
    quoted_text,
    run_lengths,
)

__all__ = [
    "aware_instants",
    "fixed_offsets",
    "instant_by_boundary",
    "literal_patterns",
    "literal_text",
    "padded_numeric_letters",
    "quoted_text",
    "run_lengths",
]
