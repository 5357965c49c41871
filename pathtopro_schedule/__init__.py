"""
pathtopro-schedule: Overwatch Path to Pro broadcast schedule extractor.

Pulls the schedule tables out of the page's embedded Next.js JSON,
resolves each row's loosely written time (``6:00 PM PT``,
``7:00 PM CET``) to an absolute instant, converts it to Almaty time and
writes a JSON and a CSV report.

Public API surface:

- ``run(...)`` -- fetch the page, build the schedule and write both
  reports. Returns the written paths.
- ``build_schedule(html, ...)`` -- build the schedule from page HTML that
  was already fetched. Returns a ``PipelineResult``; nothing is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pathtopro_schedule._pipeline import build_and_export, build_from_html
from pathtopro_schedule.config import ScheduleConfig, load_config
from pathtopro_schedule.fetch import fetch_page
from pathtopro_schedule.transforms.pipeline import PipelineResult

__all__ = ["run", "build_schedule", "PipelineResult", "ScheduleConfig"]

logger = logging.getLogger(__name__)


def _resolve_config(
    config: ScheduleConfig | None,
    config_path: str | Path | None,
) -> ScheduleConfig:
    if config is not None:
        return config
    if config_path is not None:
        return load_config(config_path)
    return ScheduleConfig()


def build_schedule(
    html: str,
    config: ScheduleConfig | None = None,
    config_path: str | Path | None = None,
) -> PipelineResult:
    """Build the resolved schedule from already-fetched page HTML.

    Args:
        html: Full page body containing the embedded JSON payload.
        config: Configuration object; takes precedence over *config_path*.
        config_path: Path to a schedule.yaml; defaults apply when neither
            argument is given.

    Returns:
        A ``PipelineResult`` with the sorted records.

    Raises:
        PayloadNotFoundError: If the embedded JSON markers are missing.
        MalformedDocument: If the schedule tables cannot be located.
        MalformedFragment: If a table fragment is not well-formed.
        UnresolvableTime: If a row's time cannot be resolved.
    """
    return build_from_html(html, _resolve_config(config, config_path))


def run(
    config_path: str | Path | None = None,
    output_dir: str | None = None,
    config: ScheduleConfig | None = None,
    session=None,
) -> list[str]:
    """Fetch the schedule page, build the schedule and write both reports.

    Orchestration:
      1. ``fetch_page()`` -> page HTML.
      2. ``extract_document()`` -> page props.
      3. ``SchedulePipeline.run()`` -> sorted ``ResolvedRecord`` list.
      4. ``export_reports()`` -> JSON + CSV files.

    Any failure aborts before the reports are written.

    Args:
        config_path: Optional schedule.yaml.
        output_dir: Overrides ``output.output_dir`` from the config.
        config: Configuration object; takes precedence over *config_path*.
        session: Optional ``requests.Session`` used for the fetch.

    Returns:
        Paths of the written reports.

    Raises:
        TransportError: If the page cannot be fetched.
        ScheduleError: Any other stage failure (see ``build_schedule``).
    """
    config = _resolve_config(config, config_path)
    if output_dir is not None:
        config = config.model_copy(
            update={"output": config.output.model_copy(update={"output_dir": output_dir})}
        )
    logger.info("run() -- url=%s, output_dir=%s", config.source.url, config.output.output_dir)

    html = fetch_page(config.source.url, session=session)
    return build_and_export(html, config)
