"""Tabular exports of a ``Report`` and a CSV file sink.

Three independent exports exist, each a header row plus data rows:

- identical: ``S.No, Component A, Component B, Match %``
- similar:   ``S.No, Component A, Component B, Overlap %`` (sorted by overlap)
- children:  ``Parent Component, Child Component, Match %, Parent Match %``
  (parent groups sorted by the mean parent match of their children, then
  flattened to one row per edge)

Numbers are printed without a trailing ``.0`` (``100``, ``85.7``) except for
the parent match, which always shows two decimals (``75.00``).  CSV text is
written with minimal quoting: a field is only quoted when it contains the
delimiter, a quote or a line break.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from statistics import fmean
from typing import Any

from storyblok_analyzer.config import SortOrder
from storyblok_analyzer.models import ChildGroup, Report
from storyblok_analyzer.protocols import ReportSink

__all__ = [
    "CHILDREN_COLUMNS",
    "EXPORT_KINDS",
    "IDENTICAL_COLUMNS",
    "SIMILAR_COLUMNS",
    "CsvReportSink",
    "children_rows",
    "export_report",
    "identical_rows",
    "render_csv",
    "similar_rows",
]

logger = logging.getLogger(__name__)

IDENTICAL_COLUMNS = ["S.No", "Component A", "Component B", "Match %"]
SIMILAR_COLUMNS = ["S.No", "Component A", "Component B", "Overlap %"]
CHILDREN_COLUMNS = ["Parent Component", "Child Component", "Match %", "Parent Match %"]

EXPORT_KINDS = ("identical", "similar", "children")

_FILE_STEMS = {
    "identical": "identical_components",
    "similar": "similar_components",
    "children": "child_components",
}


def _format_percent(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def identical_rows(report: Report) -> list[list[Any]]:
    return [
        [i, pair.component_a, pair.component_b, _format_percent(pair.match)]
        for i, pair in enumerate(report.identical, start=1)
    ]


def similar_rows(report: Report, order: SortOrder = SortOrder.DESC) -> list[list[Any]]:
    """Similar pairs sorted by overlap and numbered after sorting.

    The sort is stable: pairs with equal overlap keep their report order.
    """
    ordered = sorted(
        report.similar,
        key=lambda pair: pair.overlap,
        reverse=order is SortOrder.DESC,
    )
    return [
        [i, pair.component_a, pair.component_b, _format_percent(pair.overlap)]
        for i, pair in enumerate(ordered, start=1)
    ]


def _mean_parent_match(group: ChildGroup) -> float:
    return fmean(child.parent_match for child in group.children)


def children_rows(report: Report, order: SortOrder = SortOrder.DESC) -> list[list[Any]]:
    """One row per parent/child edge, grouped by parent.

    Groups are ordered by the mean ``parent_match`` of their children; within
    a group children keep the order in which they were found.
    """
    groups = sorted(
        report.children,
        key=_mean_parent_match,
        reverse=order is SortOrder.DESC,
    )
    return [
        [
            group.parent,
            child.name,
            _format_percent(child.match),
            f"{child.parent_match:.2f}",
        ]
        for group in groups
        for child in group.children
    ]


def render_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render a header row and data rows as CSV text.

    Lines are joined with ``\\n`` and there is no trailing newline, so names
    without special characters give exactly the comma-joined rows.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().removesuffix("\n")


def _file_timestamp(moment: datetime) -> str:
    # Colons are not allowed in Windows file names.
    return moment.strftime("%Y-%m-%dT%H-%M-%S.%f")[:-3] + "Z"


class CsvReportSink:
    """Writes each export to ``<directory>/<stem>_<timestamp>.csv``.

    Args:
        directory: Output directory, created on first write.
        clock: Returns the time used in file names.  Defaults to UTC now.
    """

    def __init__(
        self,
        directory: str | Path = ".",
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._directory = Path(directory)
        self._clock = clock

    def __repr__(self) -> str:
        return f"CsvReportSink(directory={str(self._directory)!r})"

    def write(
        self,
        name: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._directory / f"{name}_{_file_timestamp(self._clock())}.csv"
        path.write_text(render_csv(headers, rows), encoding="utf-8")
        logger.info("Wrote %d rows to %s", len(rows), path)
        return path


def export_report(
    report: Report,
    sink: ReportSink,
    kinds: Iterable[str] = EXPORT_KINDS,
    similar_order: SortOrder = SortOrder.DESC,
    children_order: SortOrder = SortOrder.DESC,
) -> dict[str, Path]:
    """Write the requested exports of ``report`` to ``sink``.

    Args:
        report: The finished report.
        sink: Any ``ReportSink``.
        kinds: Subset of ``EXPORT_KINDS`` to write.
        similar_order: Sort order of the similar export.
        children_order: Sort order of the children export.

    Returns:
        Mapping from export kind to the path the sink returned.

    Raises:
        ValueError: If ``kinds`` contains an unknown export kind.
    """
    paths: dict[str, Path] = {}
    for kind in kinds:
        if kind == "identical":
            headers, rows = IDENTICAL_COLUMNS, identical_rows(report)
        elif kind == "similar":
            headers, rows = SIMILAR_COLUMNS, similar_rows(report, similar_order)
        elif kind == "children":
            headers, rows = CHILDREN_COLUMNS, children_rows(report, children_order)
        else:
            msg = f"unknown export kind {kind!r}, expected one of {EXPORT_KINDS}"
            raise ValueError(msg)
        paths[kind] = sink.write(_FILE_STEMS[kind], headers, rows)
    return paths
