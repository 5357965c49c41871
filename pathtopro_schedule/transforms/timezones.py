"""
Time resolution transform for pathtopro-schedule.

Schedule rows give a date (``03-15-2024``) and a clock time written by a
human, in one of two styles:

- ``6:00 PM PT``: the trailing ``PT`` marker means "Pacific wall-clock
  time", whichever of PST/PDT is in effect on that date. The time is
  localized in the named zone ``America/Los_Angeles`` so DST rules apply.
- ``7:00 PM CET``: an explicit abbreviation. It is looked up by exact
  text in the configured abbreviation table and applied as a fixed UTC
  offset. Unknown abbreviations fail; nothing is guessed.

Both styles are then re-expressed in the reporting zone
(``Asia/Almaty``). The resolver holds its zones as instance state built
from ``TimezoneConfig``; there are no module-level zone handles.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

from pathtopro_schedule.config import TimezoneConfig
from pathtopro_schedule.exceptions import UnresolvableTime
from pathtopro_schedule.parsers.base import RawRecord

logger = logging.getLogger(__name__)

DATETIME_FORMAT = "%m-%d-%Y %I:%M %p"

# strptime also takes one-digit fields and a lower-case meridiem
_DATETIME_SHAPE = re.compile(r"^\d{2}-\d{2}-\d{4} \d{1,2}:\d{2} (?:AM|PM)$")
_CLOCK_AND_ZONE = re.compile(r"^(?P<clock>.*?)\s*(?P<zone>[A-Za-z]+)$")
_MERIDIEMS = {"AM", "PM"}


@dataclass(frozen=True)
class ResolvedRecord:
    """A schedule row with its time resolved to absolute instants.

    Attributes:
        target_time: The instant in the reporting zone.
        tournament: Tournament name, as authored.
        region: Region label, as authored.
        broadcast: Broadcast channel, as authored.
        source_time: The same instant in the zone the row was written in.
        original_date: ``"<date> <time>"`` exactly as authored.
    """

    target_time: datetime
    tournament: str
    region: str
    broadcast: str
    source_time: datetime
    original_date: str


class TimeResolver:
    """Turns (date, time) text pairs into timezone-aware datetimes."""

    def __init__(self, config: TimezoneConfig | None = None) -> None:
        if config is None:
            config = TimezoneConfig()
        self.config = config
        self.source_zone: tzinfo = config.source_tz
        self.target_zone: tzinfo = config.target_tz
        self._fixed_zones: dict[str, timezone] = {
            abbr: timezone(timedelta(hours=offset), abbr)
            for abbr, offset in config.abbreviations.items()
        }

    def _parse_local(self, date: str, clock: str, original: str) -> datetime:
        text = f"{date.strip()} {clock.strip()}"
        if not _DATETIME_SHAPE.match(text):
            raise UnresolvableTime(
                f"Cannot parse '{original}' as '{DATETIME_FORMAT}': "
                "expected MM-DD-YYYY H:MM AM|PM"
            )
        try:
            return datetime.strptime(text, DATETIME_FORMAT)
        except ValueError as exc:
            raise UnresolvableTime(
                f"Cannot parse '{original}' as '{DATETIME_FORMAT}': {exc}"
            ) from exc

    def resolve_instant(self, date: str, time: str) -> datetime:
        """Resolve a row's date and time text to an aware datetime.

        The returned value carries the zone the row was written in
        (``America/Los_Angeles`` or a fixed offset named after the
        abbreviation).

        Raises:
            UnresolvableTime: On a format mismatch or an unknown zone
                abbreviation.
        """
        original = f"{date} {time}"
        text = time.strip()
        marker = self.config.pacific_marker

        if text.endswith(marker):
            clock = text[: -len(marker)]
            return self._parse_local(date, clock, original).replace(
                tzinfo=self.source_zone
            )

        match = _CLOCK_AND_ZONE.match(text)
        if match is None or match.group("zone").upper() in _MERIDIEMS:
            raise UnresolvableTime(f"No zone abbreviation in '{original}'")
        abbr = match.group("zone")
        zone = self._fixed_zones.get(abbr)
        if zone is None:
            raise UnresolvableTime(
                f"Unrecognized zone abbreviation '{abbr}' in '{original}'"
            )
        return self._parse_local(date, match.group("clock"), original).replace(
            tzinfo=zone
        )

    def to_target(self, instant: datetime) -> datetime:
        """Express *instant* in the reporting zone."""
        return instant.astimezone(self.target_zone)

    def resolve(self, record: RawRecord) -> ResolvedRecord:
        """Resolve one RawRecord into a ResolvedRecord."""
        source_time = self.resolve_instant(record.date, record.time)
        return ResolvedRecord(
            target_time=self.to_target(source_time),
            tournament=record.tournament,
            region=record.region,
            broadcast=record.broadcast,
            source_time=source_time,
            original_date=f"{record.date} {record.time}",
        )
