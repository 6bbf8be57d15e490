"""Schema sources for storyblok-analyzer.

- ``StoryblokSource``: live management API over httpx.
- ``StaticSource``: fixed in-memory list or JSON dump.

Both satisfy the ``SchemaSource`` Protocol structurally.
"""

from storyblok_analyzer.sources.static import StaticSource
from storyblok_analyzer.sources.storyblok import StoryblokSource

__all__ = ["StaticSource", "StoryblokSource"]
