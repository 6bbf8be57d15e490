"""ReportBuilder: accumulates pair results into the three report collections."""

from __future__ import annotations

from storyblok_analyzer.models import (
    ChildGroup,
    ChildMatch,
    IdenticalPair,
    Report,
    SimilarPair,
)

__all__ = ["ReportBuilder"]


class ReportBuilder:
    """Mutable accumulator that produces ``Report`` snapshots.

    Child matches are grouped by parent name.  Groups keep the order in which
    their parent was first seen, and children keep the order in which they
    were added.
    """

    def __init__(self) -> None:
        self._identical: list[IdenticalPair] = []
        self._similar: list[SimilarPair] = []
        self._children: dict[str, list[ChildMatch]] = {}

    def add_identical(self, component_a: str, component_b: str) -> None:
        self._identical.append(IdenticalPair(component_a, component_b))

    def add_similar(self, component_a: str, component_b: str, overlap: float) -> None:
        self._similar.append(SimilarPair(component_a, component_b, overlap))

    def add_child(
        self,
        parent: str,
        child: str,
        match: float,
        parent_match: float,
    ) -> None:
        self._children.setdefault(parent, []).append(
            ChildMatch(name=child, match=match, parent_match=parent_match)
        )

    def build(self) -> Report:
        """Return a snapshot with fresh lists; later additions do not affect it."""
        return Report(
            identical=list(self._identical),
            similar=list(self._similar),
            children=[
                ChildGroup(parent=parent, children=list(children))
                for parent, children in self._children.items()
            ],
        )
