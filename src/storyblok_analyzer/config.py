"""AnalyzerConfig and SortOrder for component analysis.

AnalyzerConfig is a frozen (immutable) dataclass holding the thresholds the
comparator applies.  SortOrder selects how exported reports are ordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["AnalyzerConfig", "SortOrder"]


class SortOrder(StrEnum):
    """Ordering applied to the similar and children exports.

    - ASC:  lowest score first.
    - DESC: highest score first.
    """

    ASC = auto()
    DESC = auto()


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Immutable configuration for the comparison engine.

    Attributes:
        similarity_threshold: Minimum best-direction overlap percentage for a
            pair to be reported as similar.  Pairs at 100 are never similar
            (they are identical or strict subsets).  Default 70.0.
        min_child_fields: Minimum number of fields a component must have to be
            reported as the child of another.  Default 3.
    """

    similarity_threshold: float = 70.0
    min_child_fields: int = 3

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 100.0:
            msg = (
                "similarity_threshold must be in [0, 100], "
                f"got {self.similarity_threshold}"
            )
            raise ValueError(msg)
        if self.min_child_fields < 1:
            msg = f"min_child_fields must be >= 1, got {self.min_child_fields}"
            raise ValueError(msg)
