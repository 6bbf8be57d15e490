"""Set-style field matching primitives.

A field of one component "matches" a field of another when both the name and
the type are equal.  Scores are percentages rounded half-up to one decimal
place, so ``2/3`` scores ``66.7`` and an exact half such as ``0.25`` of a
tenth rounds away from zero rather than to the nearest even digit.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence

from storyblok_analyzer.models import Field

__all__ = [
    "directional_similarity",
    "fields_identical",
    "matched_fields",
    "round_half_up",
]


def round_half_up(value: float, digits: int = 1) -> float:
    """Round a non-negative ``value`` half-up to ``digits`` decimal places.

    Python's ``round()`` uses banker's rounding (``round(0.25, 1) == 0.2``);
    report scores use the half-up convention instead.
    """
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def matched_fields(fields_x: Sequence[Field], fields_y: Collection[Field]) -> list[Field]:
    """Return the fields of ``fields_x`` that also occur in ``fields_y``.

    Order of ``fields_x`` is preserved.  ``fields_y`` is only used for
    membership tests; pass a set to keep them constant-time.
    """
    return [f for f in fields_x if f in fields_y]


def directional_similarity(fields_x: Sequence[Field], fields_y: Collection[Field]) -> float:
    """Percentage of ``fields_x`` found in ``fields_y``, rounded to one decimal.

    Returns 0.0 when ``fields_x`` is empty.
    """
    if not fields_x:
        return 0.0
    ratio = len(matched_fields(fields_x, fields_y)) / len(fields_x)
    return round_half_up(ratio * 100)


def fields_identical(fields_a: Sequence[Field], fields_b: Sequence[Field]) -> bool:
    """True when both sequences have the same length and every A field is in B."""
    if len(fields_a) != len(fields_b):
        return False
    lookup = frozenset(fields_b)
    return all(f in lookup for f in fields_a)
