"""Value types shared by the extractor, comparator, aggregator and sinks.

Every type here is a frozen dataclass, so attributes cannot be reassigned.
The collections inside ``Report`` and ``ChildGroup`` are plain lists owned by
the caller: each analysis run builds new ones, and changing them never affects
another report.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from storyblok_analyzer.errors import SchemaFormatError

__all__ = [
    "AnalysisResult",
    "ChildGroup",
    "ChildMatch",
    "ComparisonResult",
    "Component",
    "Field",
    "IdenticalPair",
    "Report",
    "SimilarPair",
]


@dataclass(frozen=True, slots=True)
class Component:
    """A named content-type definition as returned by the CMS.

    Attributes:
        name: Technical component name, unique within one space.
        schema: Mapping from field name to field definition, or None when the
            component has no schema at all.  Any empty value counts as no
            fields.
    """

    name: str
    schema: Mapping[str, Any] | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> Component:
        """Build a Component from one entry of the API ``components`` array.

        Only ``name`` and ``schema`` are read; every other key is ignored.  The
        schema is kept as-is so that malformed field definitions surface later,
        inside the per-pair error boundary.

        Raises:
            SchemaFormatError: If ``raw`` is not a mapping or has no string name.
        """
        if not isinstance(raw, Mapping):
            msg = f"component entry must be an object, got {type(raw).__name__}"
            raise SchemaFormatError(msg)
        name = raw.get("name")
        if not isinstance(name, str):
            msg = f"component entry has no name: {raw!r}"
            raise SchemaFormatError(msg)
        return cls(name=name, schema=raw.get("schema"))


@dataclass(frozen=True, slots=True)
class Field:
    """A normalized ``(name, type)`` schema member."""

    name: str
    type: str | None


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Outcome of comparing candidate parent A against candidate child B.

    Attributes:
        is_identical: Both components have exactly the same field set.
        similarity: Best-direction overlap percentage, one decimal, in [0, 100].
        is_subset: B qualifies as a child of A.
        parent_match_percent: Share of A's fields covered by B's matched
            fields, as a percentage.  0.0 unless ``is_subset``.
    """

    is_identical: bool
    similarity: float
    is_subset: bool = False
    parent_match_percent: float = 0.0


@dataclass(frozen=True, slots=True)
class IdenticalPair:
    component_a: str
    component_b: str
    match: int = 100


@dataclass(frozen=True, slots=True)
class SimilarPair:
    component_a: str
    component_b: str
    overlap: float


@dataclass(frozen=True, slots=True)
class ChildMatch:
    """One child entry of a parent group.

    ``match`` is the pair's similarity score; ``parent_match`` is the
    unrounded share of the parent's fields covered by the child.
    """

    name: str
    match: float
    parent_match: float


@dataclass(frozen=True, slots=True)
class ChildGroup:
    """A parent component and its children, in the order they were found."""

    parent: str
    children: list[ChildMatch]


@dataclass(frozen=True, slots=True)
class Report:
    """The three relationship collections produced by one analysis run.

    Reports built by ``ReportBuilder`` never share their lists.
    """

    identical: list[IdenticalPair] = field(default_factory=list)
    similar: list[SimilarPair] = field(default_factory=list)
    children: list[ChildGroup] = field(default_factory=list)

    @classmethod
    def empty(cls) -> Report:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.identical or self.similar or self.children)


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """A finished report together with the textual progress/error log.

    ``fatal_error`` is set when the run was aborted before any comparison
    (missing space id, failed fetch); the report is then empty.
    """

    report: Report
    log: tuple[str, ...] = ()
    fatal_error: str | None = None

    @property
    def failed(self) -> bool:
        return self.fatal_error is not None
