"""Tests for tabular exports and the CSV sink.

Covers:
- Column headers and row shapes of the three exports
- Number formatting (``100``, ``85.7``, ``75.00``)
- Sort orders for similar pairs and child groups
- CSV rendering: naive join for safe names, quoting for unsafe ones
- CsvReportSink file naming and export_report kind selection
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from storyblok_analyzer.config import SortOrder
from storyblok_analyzer.export import (
    CHILDREN_COLUMNS,
    IDENTICAL_COLUMNS,
    SIMILAR_COLUMNS,
    CsvReportSink,
    children_rows,
    export_report,
    identical_rows,
    render_csv,
    similar_rows,
)
from storyblok_analyzer.models import (
    ChildGroup,
    ChildMatch,
    IdenticalPair,
    Report,
    SimilarPair,
)
from storyblok_analyzer.protocols import ReportSink

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def report() -> Report:
    return Report(
        identical=[IdenticalPair("A", "B"), IdenticalPair("C", "D")],
        similar=[
            SimilarPair("A", "E", 75.0),
            SimilarPair("B", "F", 85.7),
            SimilarPair("C", "G", 71.4),
        ],
        children=[
            ChildGroup("page", [ChildMatch("hero", 100.0, 60.0), ChildMatch("card", 100.0, 80.0)]),
            ChildGroup("grid", [ChildMatch("cell", 100.0, 75.0)]),
            ChildGroup("nav", [ChildMatch("link", 100.0, 200 / 3)]),
        ],
    )


def _fixed_clock() -> datetime:
    return datetime(2024, 5, 1, 12, 30, 15, 123000, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


class TestColumns:
    def test_identical_columns(self) -> None:
        assert IDENTICAL_COLUMNS == ["S.No", "Component A", "Component B", "Match %"]

    def test_similar_columns(self) -> None:
        assert SIMILAR_COLUMNS == ["S.No", "Component A", "Component B", "Overlap %"]

    def test_children_columns(self) -> None:
        assert CHILDREN_COLUMNS == [
            "Parent Component",
            "Child Component",
            "Match %",
            "Parent Match %",
        ]


class TestIdenticalRows:
    def test_numbered_from_one_with_fixed_match(self, report: Report) -> None:
        assert identical_rows(report) == [[1, "A", "B", "100"], [2, "C", "D", "100"]]

    def test_empty(self) -> None:
        assert identical_rows(Report.empty()) == []


class TestSimilarRows:
    def test_descending_by_default(self, report: Report) -> None:
        assert similar_rows(report) == [
            [1, "B", "F", "85.7"],
            [2, "A", "E", "75"],
            [3, "C", "G", "71.4"],
        ]

    def test_ascending(self, report: Report) -> None:
        rows = similar_rows(report, SortOrder.ASC)
        assert [r[1] for r in rows] == ["C", "A", "B"]
        assert [r[0] for r in rows] == [1, 2, 3]

    def test_ties_keep_report_order(self) -> None:
        tied = Report(similar=[SimilarPair("X", "Y", 80.0), SimilarPair("P", "Q", 80.0)])
        assert [r[1] for r in similar_rows(tied)] == ["X", "P"]
        assert [r[1] for r in similar_rows(tied, SortOrder.ASC)] == ["X", "P"]


class TestChildrenRows:
    def test_groups_sorted_by_mean_parent_match_desc(self, report: Report) -> None:
        # means: page 70.0, grid 75.0, nav 66.67
        assert children_rows(report) == [
            ["grid", "cell", "100", "75.00"],
            ["page", "hero", "100", "60.00"],
            ["page", "card", "100", "80.00"],
            ["nav", "link", "100", "66.67"],
        ]

    def test_ascending(self, report: Report) -> None:
        assert [r[0] for r in children_rows(report, SortOrder.ASC)] == [
            "nav",
            "page",
            "page",
            "grid",
        ]

    def test_children_keep_discovery_order_within_group(self, report: Report) -> None:
        rows = [r for r in children_rows(report) if r[0] == "page"]
        assert [r[1] for r in rows] == ["hero", "card"]


# ---------------------------------------------------------------------------
# CSV rendering
# ---------------------------------------------------------------------------


class TestRenderCsv:
    def test_safe_names_are_plain_comma_join(self) -> None:
        text = render_csv(["S.No", "Component A"], [[1, "teaser"], [2, "hero"]])
        assert text == "S.No,Component A\n1,teaser\n2,hero"

    def test_header_only(self) -> None:
        assert render_csv(IDENTICAL_COLUMNS, []) == "S.No,Component A,Component B,Match %"

    def test_comma_in_name_is_quoted(self) -> None:
        text = render_csv(["a", "b"], [["hero, large", 1]])
        assert text.splitlines()[1] == '"hero, large",1'

    def test_quote_in_name_is_escaped(self) -> None:
        text = render_csv(["a"], [['say "hi"']])
        assert text.splitlines()[1] == '"say ""hi"""'


# ---------------------------------------------------------------------------
# Sink
# ---------------------------------------------------------------------------


class TestCsvReportSink:
    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(CsvReportSink(tmp_path), ReportSink)

    def test_writes_timestamped_file(self, tmp_path: Path) -> None:
        sink = CsvReportSink(tmp_path / "out", clock=_fixed_clock)
        path = sink.write("identical_components", ["a", "b"], [[1, "x"]])

        assert path == tmp_path / "out" / "identical_components_2024-05-01T12-30-15.123Z.csv"
        assert path.read_text(encoding="utf-8") == "a,b\n1,x"


class TestExportReport:
    def test_writes_all_kinds_by_default(self, tmp_path: Path, report: Report) -> None:
        paths = export_report(report, CsvReportSink(tmp_path, clock=_fixed_clock))
        assert set(paths) == {"identical", "similar", "children"}
        assert paths["children"].name.startswith("child_components_")
        assert paths["similar"].read_text(encoding="utf-8").splitlines()[1] == "1,B,F,85.7"

    def test_selected_kinds_only(self, tmp_path: Path, report: Report) -> None:
        paths = export_report(report, CsvReportSink(tmp_path), kinds=["similar"])
        assert list(paths) == ["similar"]

    def test_orders_forwarded(self, tmp_path: Path, report: Report) -> None:
        paths = export_report(
            report,
            CsvReportSink(tmp_path),
            kinds=["similar"],
            similar_order=SortOrder.ASC,
        )
        assert paths["similar"].read_text(encoding="utf-8").splitlines()[1] == "1,C,G,71.4"

    def test_unknown_kind_rejected(self, tmp_path: Path, report: Report) -> None:
        with pytest.raises(ValueError, match="unknown export kind"):
            export_report(report, CsvReportSink(tmp_path), kinds=["everything"])
