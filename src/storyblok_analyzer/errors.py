"""Exception hierarchy for storyblok-analyzer.

All errors raised deliberately by the package derive from ``AnalyzerError`` so
callers can separate them from programming errors with a single ``except``.
"""

from __future__ import annotations

__all__ = [
    "AnalyzerError",
    "ConfigurationError",
    "SchemaFetchError",
    "SchemaFormatError",
]


class AnalyzerError(Exception):
    """Base class for every storyblok-analyzer error."""


class ConfigurationError(AnalyzerError):
    """Required configuration (token, space id) is missing or invalid."""


class SchemaFetchError(AnalyzerError):
    """The component schema list could not be retrieved from the source."""


class SchemaFormatError(AnalyzerError):
    """A component or field definition does not have the expected shape."""
