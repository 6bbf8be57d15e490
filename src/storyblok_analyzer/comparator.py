"""ComponentComparator: decides the relationship between two field sets.

The comparison is directional in one respect only: A is the candidate parent
and B the candidate child.  Identity and similarity are symmetric.

Algorithm, in order:

1. Identity: equal cardinality and every field of A matched in B.  Identity
   short-circuits; the pair scores 100 and no subset test is run.
2. Similarity: ``max(score(A, B), score(B, A))`` where ``score(X, Y)`` is the
   share of X's fields matched in Y, rounded half-up to one decimal.
3. Subset: B has at least ``min_child_fields`` fields, all of them matched in
   A, and A has strictly more fields than the matched subset.
"""

from __future__ import annotations

from collections.abc import Sequence

from storyblok_analyzer.config import AnalyzerConfig
from storyblok_analyzer.matching import (
    directional_similarity,
    fields_identical,
    matched_fields,
)
from storyblok_analyzer.models import ComparisonResult, Field

__all__ = ["ComponentComparator"]


class ComponentComparator:
    """Compares the normalized field sets of two components.

    Example::

        from storyblok_analyzer.comparator import ComponentComparator
        from storyblok_analyzer.models import Field

        cmp = ComponentComparator()
        parent = [Field("x", "text"), Field("y", "text"), Field("z", "text"), Field("w", "text")]
        child = parent[:3]
        result = cmp.compare(parent, child)
        print(result.is_subset, result.parent_match_percent)  # True 75.0
    """

    def __init__(self, config: AnalyzerConfig | None = None) -> None:
        self._config: AnalyzerConfig = config if config is not None else AnalyzerConfig()

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def compare(
        self,
        fields_a: Sequence[Field],
        fields_b: Sequence[Field],
    ) -> ComparisonResult:
        """Compare candidate parent ``fields_a`` with candidate child ``fields_b``.

        Args:
            fields_a: Fields of the component that appears first in fetch order.
            fields_b: Fields of the component that appears later.  Either
                sequence may be empty.

        Returns:
            A ``ComparisonResult``.  ``similarity`` is 100.0 for identical pairs.
        """
        if fields_identical(fields_a, fields_b):
            return ComparisonResult(is_identical=True, similarity=100.0)

        lookup_a = frozenset(fields_a)
        lookup_b = frozenset(fields_b)
        similarity = max(
            directional_similarity(fields_a, lookup_b),
            directional_similarity(fields_b, lookup_a),
        )

        matched = len(matched_fields(fields_b, lookup_a))
        is_subset = (
            len(fields_b) >= self._config.min_child_fields
            and matched == len(fields_b)
            and matched < len(fields_a)
        )
        parent_match = (matched / len(fields_a)) * 100 if is_subset else 0.0

        return ComparisonResult(
            is_identical=False,
            similarity=similarity,
            is_subset=is_subset,
            parent_match_percent=parent_match,
        )

    def is_similar(self, result: ComparisonResult) -> bool:
        """True when ``result`` belongs in the similar report."""
        return self._config.similarity_threshold <= result.similarity < 100.0
