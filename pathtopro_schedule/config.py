"""
Configuration models and YAML I/O for pathtopro-schedule.

This module defines the Pydantic models that map 1:1 to schedule.yaml,
plus helpers for loading and saving it. Every field has a default that
reproduces the published Path to Pro page layout, so running without a
config file is the normal case.

Key models:
- ScheduleConfig: Top-level config (source + navigation + timezones +
  pipeline + output).
- SourceConfig: Page URL and the marker pair around the embedded JSON.
- NavigationConfig: Key names used to walk down to the schedule tables.
- TimezoneConfig: Source/target zones and the abbreviation table.
- PipelineConfig: Row failure policy.
- OutputConfig: Output directory, file names and tabular format.

Key functions:
- load_config(path) -> ScheduleConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- default_config() -> ScheduleConfig: The built-in configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

from pathtopro_schedule.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

SCHEDULE_URL = "https://overwatchleague.com/en-us/pathtopro/schedule"
PAYLOAD_PREFIX = '<script id="__NEXT_DATA__" type="application/json">'
PAYLOAD_SUFFIX = "</script>"

# UTC offsets (hours) for abbreviations that name exactly one offset.
# Abbreviations with more than one meaning (IST, BST, CST, ...) are not listed.
DEFAULT_ABBREVIATIONS: dict[str, float] = {
    "UTC": 0,
    "GMT": 0,
    "WET": 0,
    "WEST": 1,
    "CET": 1,
    "CEST": 2,
    "EET": 2,
    "EEST": 3,
    "MSK": 3,
    "HST": -10,
    "AKST": -9,
    "AKDT": -8,
    "PST": -8,
    "PDT": -7,
    "MST": -7,
    "MDT": -6,
    "EST": -5,
    "EDT": -4,
    "BRT": -3,
    "KST": 9,
    "JST": 9,
    "AEST": 10,
    "AEDT": 11,
    "NZST": 12,
    "NZDT": 13,
}


class SourceConfig(BaseModel):
    """Where the schedule page lives and how its JSON payload is delimited."""

    url: str = Field(SCHEDULE_URL, description="Schedule page URL")
    payload_prefix: str = Field(
        PAYLOAD_PREFIX, description="Opening tag that precedes the JSON payload"
    )
    payload_suffix: str = Field(
        PAYLOAD_SUFFIX, description="Closing tag that follows the JSON payload"
    )


class NavigationConfig(BaseModel):
    """Key names used to reach the schedule tables inside the JSON document.

    The default values describe the Next.js page props of the Path to Pro
    schedule page::

        props.pageProps.blocks[*]            <- scanned for "tabs"
            .tabs.tabs[*]                    <- one entry per tab
                .blocks[*]                   <- content blocks
                    .richTextEditor.articleRawHtml
    """

    root_path: list[str] = Field(default_factory=lambda: ["props", "pageProps"])
    blocks_key: str = "blocks"
    marker_key: str = "tabs"
    tabs_key: str = "tabs"
    content_key: str = "blocks"
    text_path: list[str] = Field(
        default_factory=lambda: ["richTextEditor", "articleRawHtml"]
    )

    @field_validator("root_path", "text_path")
    @classmethod
    def _check_path_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("Key paths must contain at least one key")
        return value


class TimezoneConfig(BaseModel):
    """Zones used by the time resolver."""

    source_zone: str = Field(
        "America/Los_Angeles",
        description="IANA zone for times carrying the Pacific marker",
    )
    target_zone: str = Field(
        "Asia/Almaty", description="IANA zone all output times are expressed in"
    )
    pacific_marker: str = Field(
        "PT",
        min_length=1,
        description="Trailing marker meaning 'wall-clock time in source_zone'",
    )
    abbreviations: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_ABBREVIATIONS),
        description="Recognized zone abbreviations -> UTC offset in hours",
    )

    @field_validator("source_zone", "target_zone")
    @classmethod
    def _check_zone_exists(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown IANA time zone: '{value}'") from exc
        return value

    @field_validator("abbreviations")
    @classmethod
    def _check_abbreviations(cls, value: dict[str, float]) -> dict[str, float]:
        for abbr, offset in value.items():
            if not abbr.isalpha() or not abbr.isupper():
                raise ValueError(
                    f"Zone abbreviation '{abbr}' must be upper-case letters only"
                )
            if not -14 <= offset <= 14:
                raise ValueError(
                    f"Offset for '{abbr}' out of range: {offset} hours"
                )
        return value

    @property
    def source_tz(self) -> ZoneInfo:
        return ZoneInfo(self.source_zone)

    @property
    def target_tz(self) -> ZoneInfo:
        return ZoneInfo(self.target_zone)


class PipelineConfig(BaseModel):
    """Pipeline behaviour toggles."""

    skip_unresolvable_rows: bool = Field(
        False,
        description=(
            "If True, rows whose time cannot be resolved are reported and "
            "skipped; if False, the first such row aborts the run"
        ),
    )


class OutputConfig(BaseModel):
    """Output settings."""

    output_dir: str = Field(".", description="Directory for report files")
    json_filename: str = "overwatch-translations.json"
    csv_filename: str = "overwatch-translations.csv"
    tabular_format: Literal["csv", "parquet"] = Field(
        "csv", description="Format of the tabular report"
    )


class ScheduleConfig(BaseModel):
    """Top-level configuration for pathtopro-schedule.

    Maps 1:1 to schedule.yaml.
    """

    source: SourceConfig = Field(default_factory=SourceConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    timezones: TimezoneConfig = Field(default_factory=TimezoneConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def default_config() -> ScheduleConfig:
    """Return the built-in configuration."""
    return ScheduleConfig()


def load_config(path: str | Path) -> ScheduleConfig:
    """Load and validate schedule.yaml into a ScheduleConfig model.

    Sections and fields left out of the file keep their defaults.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping at the top level: {path}"
        )
    logger.info("Loaded config from %s", path)
    return ScheduleConfig.model_validate(raw)


def save_config(config: ScheduleConfig, path: str | Path) -> None:
    """Serialize a ScheduleConfig to YAML with a short header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# pathtopro-schedule configuration\n")
        f.write("# Every key is optional; omitted keys fall back to defaults.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
