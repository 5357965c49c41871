"""
Internal orchestration for pathtopro-schedule.

Holds the page → pipeline → export sequence shared by the public
``build_schedule()`` and ``run()`` functions.

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging

from pathtopro_schedule.config import ScheduleConfig
from pathtopro_schedule.export import export_reports
from pathtopro_schedule.payload import extract_document
from pathtopro_schedule.transforms.pipeline import PipelineResult, SchedulePipeline

logger = logging.getLogger(__name__)


def build_from_html(html: str, config: ScheduleConfig) -> PipelineResult:
    """Extract the page props from *html* and run the schedule pipeline."""
    document = extract_document(
        html,
        prefix=config.source.payload_prefix,
        suffix=config.source.payload_suffix,
    )
    return SchedulePipeline(config).run(document)


def build_and_export(html: str, config: ScheduleConfig) -> list[str]:
    """Run the pipeline over *html* and write both reports.

    Nothing is written unless every row made it through the pipeline
    (or was skipped under the per-row policy).

    Returns:
        List of report paths that were written.
    """
    result = build_from_html(html, config)
    written = export_reports(result.records, config.output)
    logger.info(
        "Pipeline complete: %d row(s) written, %d skipped",
        len(result.records), len(result.skipped),
    )
    return written
