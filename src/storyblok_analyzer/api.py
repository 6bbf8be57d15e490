"""Public API functions for storyblok-analyzer.

This module provides the four user-facing functions: analyze, run_analysis,
compare_components, and similarity_score.  Each call creates a fresh
ComponentAnalyzer (or ComponentComparator) to guarantee zero global state
mutation between calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from storyblok_analyzer.analyzer import ComponentAnalyzer
from storyblok_analyzer.comparator import ComponentComparator
from storyblok_analyzer.config import AnalyzerConfig
from storyblok_analyzer.fields import extract_fields
from storyblok_analyzer.models import AnalysisResult, ComparisonResult, Component
from storyblok_analyzer.protocols import SchemaSource

__all__ = ["analyze", "compare_components", "run_analysis", "similarity_score"]


def analyze(
    components: Sequence[Component],
    config: AnalyzerConfig | None = None,
) -> AnalysisResult:
    """Compute the identical, similar and children reports for ``components``.

    Args:
        components: Already fetched components, in fetch order.  Earlier
            components are treated as candidate parents of later ones.
        config: Comparison thresholds.  Defaults to ``AnalyzerConfig()``.

    Returns:
        An ``AnalysisResult`` with the report and the progress/error log.
        Failing pairs are logged and skipped; they never raise.
    """
    return ComponentAnalyzer(config=config).analyze(components)


def run_analysis(
    source: SchemaSource,
    space_id: str | None,
    config: AnalyzerConfig | None = None,
) -> AnalysisResult:
    """Fetch the components of ``space_id`` from ``source`` and analyze them.

    A missing ``space_id`` or a failed fetch yields an empty report whose log
    ends with a single ``Error: ...`` line instead of raising.
    """
    return ComponentAnalyzer(config=config).run(source, space_id)


def compare_components(
    parent: Component,
    child: Component,
    config: AnalyzerConfig | None = None,
) -> ComparisonResult:
    """Compare two components, treating ``parent`` as the candidate parent.

    Raises:
        SchemaFormatError: If either schema is malformed.
    """
    comparator = ComponentComparator(config=config)
    return comparator.compare(extract_fields(parent), extract_fields(child))


def similarity_score(a: Component, b: Component) -> float:
    """Return the best-direction field overlap of two components.

    A float in [0.0, 100.0] rounded to one decimal; 100.0 means identical.
    """
    return compare_components(a, b).similarity
