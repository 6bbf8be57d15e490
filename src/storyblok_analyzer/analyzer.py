"""ComponentAnalyzer: runs every pairwise comparison and aggregates the report.

For ``n`` components the analyzer evaluates all ``C(n, 2)`` unordered pairs
``(i, j)`` with ``i < j`` in fetch order, so the earlier component is always
the candidate parent.  Each component's fields are extracted once before the
loop.  Each pair is evaluated inside its own error boundary: a malformed
schema fails every pair it takes part in, each failure is recorded in the log
with both positional indices, and the loop moves on.

Two error tiers exist:

- fatal: missing space id or any exception raised while fetching.  ``run()``
  returns an empty report and a single ``Error: ...`` line after the start
  line.
- recoverable: a failing pair.  Logged as ``Error comparing i and j: ...``.

No retries happen at either tier.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from storyblok_analyzer.comparator import ComponentComparator
from storyblok_analyzer.config import AnalyzerConfig
from storyblok_analyzer.errors import ConfigurationError
from storyblok_analyzer.fields import extract_fields
from storyblok_analyzer.models import AnalysisResult, Component, Field, Report
from storyblok_analyzer.protocols import SchemaSource
from storyblok_analyzer.report import ReportBuilder

__all__ = ["ComponentAnalyzer"]

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract(component: Component) -> tuple[Field, ...] | Exception:
    try:
        return extract_fields(component)
    except Exception as exc:
        return exc


def _fields_or_raise(extracted: tuple[Field, ...] | Exception) -> tuple[Field, ...]:
    # Extraction errors surface in the pair boundary, once per affected pair.
    if isinstance(extracted, Exception):
        raise extracted
    return extracted


class ComponentAnalyzer:
    """Builds identical/similar/children reports for a list of components.

    A single ``ComponentComparator`` is reused across all pairs.  The analyzer
    holds no state between calls: every ``analyze()`` returns a new
    ``AnalysisResult`` and never merges with a previous one.

    Example::

        from storyblok_analyzer.analyzer import ComponentAnalyzer
        from storyblok_analyzer.models import Component

        text = {"type": "text"}
        result = ComponentAnalyzer().analyze([
            Component("A", {"x": text, "y": text}),
            Component("B", {"x": text, "y": text}),
        ])
        print(result.report.identical)  # [IdenticalPair('A', 'B', 100)]
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialise the analyzer.

        Args:
            config: Comparison thresholds.  Defaults to ``AnalyzerConfig()``.
            clock:  Returns the current time for the start/finish log lines.
                Injected by tests to get deterministic logs.
        """
        self._comparator = ComponentComparator(config=config)
        self._clock = clock

    def analyze(self, components: Sequence[Component]) -> AnalysisResult:
        """Compare every unordered pair of ``components``.

        Args:
            components: Fully fetched components in fetch order.

        Returns:
            The report plus a log with the start line, the component count,
            the completion line and one line per failed pair.
        """
        log = [self._started_line()]
        return self._analyze(components, log)

    def run(self, source: SchemaSource, space_id: str | None) -> AnalysisResult:
        """Fetch the components of ``space_id`` from ``source`` and analyze them.

        Fatal errors (missing ``space_id``, any exception from the source) do
        not raise; they
        produce an empty report and an ``Error:`` log line.
        """
        log = [self._started_line()]
        try:
            if not space_id:
                raise ConfigurationError("space_id not found")
            components = source.fetch_components(space_id)
        except Exception as exc:
            logger.error("Analysis aborted: %s", exc)
            log.append(f"Error: {exc}")
            return AnalysisResult(
                report=Report.empty(),
                log=tuple(log),
                fatal_error=str(exc),
            )
        return self._analyze(components, log)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _started_line(self) -> str:
        started = self._clock()
        logger.info("Analysis started")
        return f"Analysis started at {_timestamp(started)}"

    def _analyze(self, components: Sequence[Component], log: list[str]) -> AnalysisResult:
        log.append(f"Fetched {len(components)} components.")
        logger.info("Comparing %d components", len(components))

        extracted = [_extract(component) for component in components]
        builder = ReportBuilder()
        errors: list[str] = []
        for i, j in itertools.combinations(range(len(components)), 2):
            try:
                self._compare_pair(
                    components[i],
                    _fields_or_raise(extracted[i]),
                    components[j],
                    _fields_or_raise(extracted[j]),
                    builder,
                )
            except Exception as exc:
                logger.warning("Comparison of components %d and %d failed: %s", i, j, exc)
                errors.append(f"Error comparing {i} and {j}: {exc}")

        report = builder.build()
        log.append(f"Comparison done at {_timestamp(self._clock())}")
        log.extend(errors)
        logger.info(
            "Analysis finished: %d identical, %d similar, %d parents, %d errors",
            len(report.identical),
            len(report.similar),
            len(report.children),
            len(errors),
        )
        return AnalysisResult(report=report, log=tuple(log))

    def _compare_pair(
        self,
        comp_a: Component,
        fields_a: tuple[Field, ...],
        comp_b: Component,
        fields_b: tuple[Field, ...],
        builder: ReportBuilder,
    ) -> None:
        result = self._comparator.compare(fields_a, fields_b)

        if result.is_identical:
            builder.add_identical(comp_a.name, comp_b.name)
            return
        if self._comparator.is_similar(result):
            builder.add_similar(comp_a.name, comp_b.name, result.similarity)
        if result.is_subset:
            builder.add_child(
                comp_a.name,
                comp_b.name,
                match=result.similarity,
                parent_match=result.parent_match_percent,
            )
