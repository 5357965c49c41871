"""
Schedule pipeline orchestrator for pathtopro-schedule.

Runs the fixed sequence of steps over a decoded page document:

1. **Navigator**: find the table fragments inside the page props.
2. **TableFragmentParser**: turn each fragment into RawRecords; rows of
   all fragments are concatenated in navigation order.
3. **TimeResolver**: resolve each RawRecord into a ResolvedRecord.
4. **Ordering**: stable sort by the reporting-zone instant.

Nothing is filtered or deduplicated. Structural errors (navigation,
markup) always abort the run. What happens on a row whose time cannot be
resolved is controlled by ``PipelineConfig.skip_unresolvable_rows``:

- ``False`` (default): the ``UnresolvableTime`` propagates and the whole
  run aborts.
- ``True``: the row is recorded in ``PipelineResult.skipped``, logged,
  and left out of the output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pathtopro_schedule.config import ScheduleConfig
from pathtopro_schedule.exceptions import UnresolvableTime
from pathtopro_schedule.navigator import extract_fragments
from pathtopro_schedule.parsers.base import RawRecord
from pathtopro_schedule.parsers.table import TableFragmentParser
from pathtopro_schedule.transforms.ordering import sort_by_target_time
from pathtopro_schedule.transforms.timezones import ResolvedRecord, TimeResolver

logger = logging.getLogger(__name__)


@dataclass
class SkippedRow:
    """A row left out under the per-row failure policy."""

    record: RawRecord
    reason: str


@dataclass
class PipelineResult:
    """Output of the schedule pipeline.

    Attributes:
        records: Resolved rows, sorted by reporting-zone instant.
        fragments: Number of table fragments processed.
        rows: Number of raw rows parsed across all fragments.
        skipped: Rows left out because their time could not be resolved.
            Always empty unless ``skip_unresolvable_rows`` is enabled.
    """

    records: list[ResolvedRecord] = field(default_factory=list)
    fragments: int = 0
    rows: int = 0
    skipped: list[SkippedRow] = field(default_factory=list)


class SchedulePipeline:
    """Orchestrates navigation, parsing, time resolution and ordering.

    The pipeline is stateless between runs: each call to ``run()``
    processes a fresh document.
    """

    def __init__(self, config: ScheduleConfig | None = None) -> None:
        if config is None:
            config = ScheduleConfig()
        self.config = config
        self.parser = TableFragmentParser()
        self.resolver = TimeResolver(config.timezones)

    def parse_rows(self, fragments: list[str]) -> list[RawRecord]:
        """Parse every fragment and concatenate the rows in order."""
        rows: list[RawRecord] = []
        for fragment in fragments:
            rows.extend(self.parser.parse(fragment))
        return rows

    def resolve_rows(
        self, rows: list[RawRecord]
    ) -> tuple[list[ResolvedRecord], list[SkippedRow]]:
        """Resolve every row, applying the configured failure policy."""
        skip = self.config.pipeline.skip_unresolvable_rows
        resolved: list[ResolvedRecord] = []
        skipped: list[SkippedRow] = []
        for row in rows:
            try:
                resolved.append(self.resolver.resolve(row))
            except UnresolvableTime as exc:
                if not skip:
                    raise
                logger.warning("Skipping row %r: %s", row, exc)
                skipped.append(SkippedRow(record=row, reason=str(exc)))
        return resolved, skipped

    def run(self, document: dict[str, Any]) -> PipelineResult:
        """Run all steps over a decoded page document.

        Raises:
            MalformedDocument: If the tables cannot be located.
            MalformedFragment: If a table fragment is not well-formed.
            UnresolvableTime: If a row's time cannot be resolved and
                ``skip_unresolvable_rows`` is disabled.
        """
        fragments = extract_fragments(document, self.config.navigation)
        rows = self.parse_rows(fragments)
        logger.info("Parsed %d row(s) from %d fragment(s)", len(rows), len(fragments))

        resolved, skipped = self.resolve_rows(rows)
        if skipped:
            logger.warning(
                "%d of %d row(s) skipped with unresolvable times",
                len(skipped), len(rows),
            )

        return PipelineResult(
            records=sort_by_target_time(resolved),
            fragments=len(fragments),
            rows=len(rows),
            skipped=skipped,
        )
