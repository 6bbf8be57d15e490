"""Command-line entry point: ``storyblok-analyzer``.

Usage:
  storyblok-analyzer --space-id 123456
  storyblok-analyzer --space-id 123456 --export similar --similar-order asc
  storyblok-analyzer --input components.json --out-dir reports/

The management token is taken from ``STORYBLOK_MANAGEMENT_TOKEN``; a ``.env``
file in the working directory is loaded first when present.  ``--space-id``
falls back to ``STORYBLOK_SPACE_ID`` and ``--api-url`` to ``STORYBLOK_API_URL``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from dotenv import find_dotenv, load_dotenv

from storyblok_analyzer.analyzer import ComponentAnalyzer
from storyblok_analyzer.config import AnalyzerConfig, SortOrder
from storyblok_analyzer.errors import AnalyzerError
from storyblok_analyzer.export import EXPORT_KINDS, CsvReportSink, export_report
from storyblok_analyzer.protocols import SchemaSource
from storyblok_analyzer.sources import StaticSource, StoryblokSource
from storyblok_analyzer.sources.storyblok import DEFAULT_BASE_URL

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

SPACE_ID_ENV_VAR = "STORYBLOK_SPACE_ID"
API_URL_ENV_VAR = "STORYBLOK_API_URL"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="storyblok-analyzer",
        description="Find identical, similar and parent/child Storyblok components.",
    )
    p.add_argument("--space-id", default=None, help="Storyblok space id")
    p.add_argument(
        "--input",
        default=None,
        help="read components from a JSON dump instead of the management API",
    )
    p.add_argument("--api-url", default=None, help=f"API root (default {DEFAULT_BASE_URL})")
    p.add_argument("--threshold", type=float, default=70.0, help="minimum similar overlap %%")
    p.add_argument("--min-child-fields", type=int, default=3)
    p.add_argument(
        "--export",
        action="append",
        choices=EXPORT_KINDS,
        default=None,
        help="export to write (repeatable, default: all)",
    )
    p.add_argument("--out-dir", default=".", help="directory for CSV exports")
    p.add_argument(
        "--similar-order",
        type=SortOrder,
        choices=list(SortOrder),
        default=SortOrder.DESC,
    )
    p.add_argument(
        "--children-order",
        type=SortOrder,
        choices=list(SortOrder),
        default=SortOrder.DESC,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def _build_source(args: argparse.Namespace) -> SchemaSource:
    if args.input:
        return StaticSource.from_json_file(args.input)
    api_url = args.api_url or os.environ.get(API_URL_ENV_VAR) or DEFAULT_BASE_URL
    return StoryblokSource(base_url=api_url)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = AnalyzerConfig(
            similarity_threshold=args.threshold,
            min_child_fields=args.min_child_fields,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        source = _build_source(args)
    except AnalyzerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("Using %r", source)
    space_id = args.space_id or os.environ.get(SPACE_ID_ENV_VAR)
    if args.input and not space_id:
        # A dump needs no space id; the source ignores it.
        space_id = "local"

    result = ComponentAnalyzer(config=config).run(source, space_id)
    for line in result.log:
        print(line)

    if result.failed:
        return 1

    report = result.report
    print(
        f"{len(report.identical)} identical, {len(report.similar)} similar, "
        f"{sum(len(g.children) for g in report.children)} child relationships"
    )

    paths = export_report(
        report,
        CsvReportSink(args.out_dir),
        kinds=dict.fromkeys(args.export or EXPORT_KINDS),
        similar_order=args.similar_order,
        children_order=args.children_order,
    )
    for kind, path in paths.items():
        print(f"{kind}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
