"""StaticSource: an in-memory schema source.

Serves a fixed component list for any space id.  Useful for tests and for
analysing a schema dump saved from the management API (``--input`` on the
command line) without network access.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from storyblok_analyzer.errors import SchemaFetchError
from storyblok_analyzer.models import Component

__all__ = ["StaticSource"]


class StaticSource:
    """Schema source backed by a pre-built component list.

    Args:
        components: Components to serve, either ``Component`` instances or raw
            API entries (mappings with ``name`` and ``schema``).
    """

    def __init__(self, components: Iterable[Component | Mapping[str, Any]]) -> None:
        self._components: list[Component] = [
            c if isinstance(c, Component) else Component.from_mapping(c)
            for c in components
        ]

    def __repr__(self) -> str:
        return f"StaticSource(components={len(self._components)})"

    @classmethod
    def from_json_file(cls, path: str | Path) -> StaticSource:
        """Load components from a JSON file.

        Accepts either the API response shape ``{"components": [...]}`` or a
        bare list of component entries.

        Raises:
            SchemaFetchError: If the file cannot be read or parsed, or has
                neither shape.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"cannot load components from {path}: {exc}"
            raise SchemaFetchError(msg) from exc

        if isinstance(data, Mapping):
            data = data.get("components")
        if not isinstance(data, list):
            msg = f"{path} does not contain a components list"
            raise SchemaFetchError(msg)
        return cls(data)

    def fetch_components(self, space_id: str) -> list[Component]:
        """Return a copy of the stored list; ``space_id`` is ignored."""
        return list(self._components)
