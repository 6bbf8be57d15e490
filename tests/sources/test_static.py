"""Unit tests for StaticSource."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from storyblok_analyzer.errors import SchemaFetchError, SchemaFormatError
from storyblok_analyzer.models import Component
from storyblok_analyzer.protocols import SchemaSource
from storyblok_analyzer.sources import StaticSource

RAW = [
    {"name": "teaser", "schema": {"headline": {"type": "text"}}, "id": 1},
    {"name": "page", "schema": None},
]


class TestStaticSource:
    def test_protocol_conformance(self) -> None:
        assert isinstance(StaticSource([]), SchemaSource)

    def test_accepts_raw_entries(self) -> None:
        components = StaticSource(RAW).fetch_components("any")
        assert components == [
            Component("teaser", {"headline": {"type": "text"}}),
            Component("page", None),
        ]

    def test_accepts_components(self) -> None:
        comp = Component("hero", {})
        assert StaticSource([comp]).fetch_components("1") == [comp]

    def test_returns_copy(self) -> None:
        source = StaticSource(RAW)
        source.fetch_components("1").clear()
        assert len(source.fetch_components("1")) == 2

    def test_invalid_entry_raises(self) -> None:
        with pytest.raises(SchemaFormatError):
            StaticSource([{"schema": {}}])

    def test_repr(self) -> None:
        assert repr(StaticSource(RAW)) == "StaticSource(components=2)"


class TestFromJsonFile:
    def test_api_response_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "components.json"
        path.write_text(json.dumps({"components": RAW}), encoding="utf-8")
        assert [c.name for c in StaticSource.from_json_file(path).fetch_components("1")] == [
            "teaser",
            "page",
        ]

    def test_bare_list(self, tmp_path: Path) -> None:
        path = tmp_path / "components.json"
        path.write_text(json.dumps(RAW), encoding="utf-8")
        assert len(StaticSource.from_json_file(path).fetch_components("1")) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaFetchError, match="cannot load"):
            StaticSource.from_json_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaFetchError):
            StaticSource.from_json_file(path)

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"stories": []}), encoding="utf-8")
        with pytest.raises(SchemaFetchError, match="components list"):
            StaticSource.from_json_file(path)
