"""
Report writer for pathtopro-schedule.

Writes the resolved schedule as two artifacts in the output directory:

- ``overwatch-translations.json``: a JSON array, one object per row::

      {"almatyTime": "2024-03-16T06:00:00+05:00", "tournament": "...",
       "region": "...", "broadcast": "...",
       "originalTime": "2024-03-15T18:00:00-07:00",
       "originalDate": "03-15-2024 6:00 PM PT"}

- ``overwatch-translations.csv``: a table with the header
  ``Almaty Time,Tournament,Region,Broadcast,Original Time,Original Date``,
  CRLF line endings and timestamps formatted like ``16 Mar 24 06:00 +05``.
  Rows are emitted through pandas' CSV writer, so commas and quotes
  inside cell text are quoted rather than breaking the row.

With ``tabular_format: parquet`` the tabular report is written as Parquet
instead, keeping ``Almaty Time`` as a tz-aware timestamp column.

Both reports are rendered in memory and staged before either replaces
its final name, so a failed run leaves no report behind.
Output is a pure function of the records, so reruns over the same page
produce byte-identical files.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from pathtopro_schedule.config import OutputConfig
from pathtopro_schedule.exceptions import ExportError
from pathtopro_schedule.transforms.timezones import ResolvedRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%d %b %y %H:%M %Z"

CSV_COLUMNS = [
    "Almaty Time",
    "Tournament",
    "Region",
    "Broadcast",
    "Original Time",
    "Original Date",
]


# ---------------------------------------------------------------------------
# Shaping
# ---------------------------------------------------------------------------

def format_timestamp(value: datetime) -> str:
    """Format an aware datetime as ``DD Mon YY HH:MM ZZZ``."""
    return value.strftime(TIMESTAMP_FORMAT)


def to_structured(records: list[ResolvedRecord]) -> list[dict[str, Any]]:
    """Shape records into JSON-ready dicts (RFC 3339 timestamps)."""
    return [
        {
            "almatyTime": record.target_time.isoformat(),
            "tournament": record.tournament,
            "region": record.region,
            "broadcast": record.broadcast,
            "originalTime": record.source_time.isoformat(),
            "originalDate": record.original_date,
        }
        for record in records
    ]


def to_frame(records: list[ResolvedRecord]) -> pd.DataFrame:
    """Shape records into the tabular report with formatted timestamps."""
    return pd.DataFrame(
        [
            [
                format_timestamp(record.target_time),
                record.tournament,
                record.region,
                record.broadcast,
                format_timestamp(record.source_time),
                record.original_date,
            ]
            for record in records
        ],
        columns=CSV_COLUMNS,
        dtype=object,
    )


def to_typed_frame(records: list[ResolvedRecord]) -> pd.DataFrame:
    """Like ``to_frame`` but with ``Almaty Time`` kept as a timestamp column.

    Source times may carry different offsets per row, so ``Original Time``
    stays a formatted string.
    """
    df = to_frame(records)
    if records:
        df["Almaty Time"] = pd.Series(
            [record.target_time for record in records], index=df.index
        )
    return df


def render_json(records: list[ResolvedRecord]) -> str:
    """Render the structured report as compact JSON."""
    return json.dumps(to_structured(records), ensure_ascii=False, separators=(",", ":"))


def render_csv(records: list[ResolvedRecord]) -> str:
    """Render the tabular report as CSV text with CRLF line endings."""
    return to_frame(records).to_csv(index=False, lineterminator="\r\n")


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _staging_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.tmp")


def _discard(*paths: Path) -> None:
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", path, exc)


def _write_bytes(path: Path, data: bytes, name: str) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise ExportError(f"Failed to write {name}: {exc}") from exc


def _write_parquet(df: pd.DataFrame, path: Path, name: str) -> None:
    try:
        df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(f"Failed to write {name} as parquet: {exc}") from exc


def _commit(staged: list[tuple[Path, Path]]) -> None:
    """Move staged files into place; on failure remove the ones already moved."""
    committed: list[Path] = []
    for staging, final in staged:
        try:
            os.replace(staging, final)
        except OSError as exc:
            _discard(*committed)
            raise ExportError(f"Failed to write {final.name}: {exc}") from exc
        committed.append(final)


def export_reports(
    records: list[ResolvedRecord],
    output: OutputConfig | None = None,
) -> list[str]:
    """Write the structured and tabular reports to disk.

    The output directory is created if it does not exist. Both reports are
    first written under hidden staging names and only moved into place
    once both writes succeeded, so a failure leaves neither report behind.

    Args:
        records: Resolved rows in report order.
        output: Output settings; defaults to the current directory and the
            standard file names.

    Returns:
        Paths written, structured report first.

    Raises:
        ExportError: If either file cannot be written.
    """
    if output is None:
        output = OutputConfig()

    out = Path(output.output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportError(f"Cannot create output directory {out}: {exc}") from exc

    json_path = out / output.json_filename
    json_bytes = render_json(records).encode("utf-8")
    if output.tabular_format == "parquet":
        table_path = out / Path(output.csv_filename).with_suffix(".parquet").name
    else:
        table_path = out / output.csv_filename

    json_staging = _staging_path(json_path)
    table_staging = _staging_path(table_path)
    try:
        _write_bytes(json_staging, json_bytes, json_path.name)
        if output.tabular_format == "parquet":
            _write_parquet(to_typed_frame(records), table_staging, table_path.name)
        else:
            _write_bytes(table_staging, render_csv(records).encode("utf-8"), table_path.name)
        _commit([(json_staging, json_path), (table_staging, table_path)])
    except ExportError:
        _discard(json_staging, table_staging)
        raise

    logger.info("Exported %d row(s) -> %s, %s", len(records), json_path, table_path)
    return [str(json_path), str(table_path)]
