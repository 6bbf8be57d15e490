"""Storyblok analyzer - structural overlap reports for CMS component schemas."""

from __future__ import annotations

from storyblok_analyzer.analyzer import ComponentAnalyzer
from storyblok_analyzer.api import (
    analyze,
    compare_components,
    run_analysis,
    similarity_score,
)
from storyblok_analyzer.comparator import ComponentComparator
from storyblok_analyzer.config import AnalyzerConfig, SortOrder
from storyblok_analyzer.errors import (
    AnalyzerError,
    ConfigurationError,
    SchemaFetchError,
    SchemaFormatError,
)
from storyblok_analyzer.models import (
    AnalysisResult,
    ChildGroup,
    ChildMatch,
    ComparisonResult,
    Component,
    Field,
    IdenticalPair,
    Report,
    SimilarPair,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "AnalysisResult",
    "AnalyzerConfig",
    "AnalyzerError",
    "ChildGroup",
    "ChildMatch",
    "ComparisonResult",
    "Component",
    "ComponentAnalyzer",
    "ComponentComparator",
    "ConfigurationError",
    "Field",
    "IdenticalPair",
    "Report",
    "SchemaFetchError",
    "SchemaFormatError",
    "SimilarPair",
    "SortOrder",
    "analyze",
    "compare_components",
    "run_analysis",
    "similarity_score",
]
