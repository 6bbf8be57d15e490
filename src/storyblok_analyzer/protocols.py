"""Extension-point protocols for schema sources and report sinks.

Any class with a conformant method passes ``isinstance`` checks; no
inheritance is required.

Example::

    from storyblok_analyzer.models import Component
    from storyblok_analyzer.protocols import SchemaSource

    class FixtureSource:
        def fetch_components(self, space_id: str) -> list[Component]:
            return [Component("teaser", {"headline": {"type": "text"}})]

    assert isinstance(FixtureSource(), SchemaSource)  # True
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from storyblok_analyzer.models import Component

__all__ = ["ReportSink", "SchemaSource"]


@runtime_checkable
class SchemaSource(Protocol):
    """Supplies the full component list of a space.

    ``fetch_components`` must return every component in a stable order and
    raise an ``AnalyzerError`` subclass (typically ``SchemaFetchError``) when
    the list cannot be retrieved.
    """

    def fetch_components(self, space_id: str) -> list[Component]: ...


@runtime_checkable
class ReportSink(Protocol):
    """Consumes one tabular export (header row plus data rows)."""

    def write(
        self,
        name: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> Path: ...
